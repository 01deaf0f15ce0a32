"""Build CustomResourceDefinitions and OpenAPI validation schemata from type descriptions."""

__version__ = "0.1.0"