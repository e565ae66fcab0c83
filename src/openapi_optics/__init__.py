"""
openapi_optics Package

Typed, composable accessors (lenses, prisms, affine traversals, reviews)
over OpenAPI 3 documents.

Layout:
    optics         capability-tagged optics and their composition
    insord         insertion-ordered keyed container
    model          the OpenAPI document entities
    registry       per-entity accessor names
    virtual        accessors that reach through a nested field
    indexed        keyed at/ix access on hosts of keyed containers
    labels         the shared, frozen registry for the OpenAPI model
    serialization  encode-only rendering to dict / JSON / YAML

ARCHITECTURAL GUARANTEE:
------------------------
Accessors never mutate a document. Every write returns a new value.
All accessor wiring happens once, when openapi_optics.labels is imported.
"""

__version__ = "0.1.0"
