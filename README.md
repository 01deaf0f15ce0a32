# crdgen

`crdgen` builds CustomResourceDefinition objects and their OpenAPI v3
validation schemata from descriptions of API types and the markers attached
to them.

## Installation

```
pip install .
```

## Modules

- `crdgen.schema`: the schema model (`JSONSchemaProps`, `JSONSchemaPropsOrBool`,
  `JSONSchemaPropsOrArray`, `JSON`, `ExternalDocumentation`), the
  `SchemaMarker` protocol, reference links (`type_ref_link`, `qualified_name`),
  `builtin_to_type`, which maps a basic type name such as `"int32"` or
  `"string"` to a JSON schema `(type, format)` pair and raises `ValueError`
  for floats and other unsupported types, and `apply_markers`, which applies
  schema markers to a schema ("apply first" markers before the rest) and
  records marker failures on an error recorder.
- `crdgen.resources`: the CustomResourceDefinition model
  (`CustomResourceDefinition`, `CustomResourceDefinitionSpec`,
  `CustomResourceDefinitionVersion`, `CustomResourceDefinitionNames`,
  `CustomResourceSubresources`, `CustomResourceColumnDefinition`,
  `CustomResourceValidation`, `GroupKind` and the rest).
- `crdgen.visitor`: `SchemaVisitor` and `edit_schema`, which walk every node
  of a schema and let the visitor edit it in place.
- `crdgen.description`: `truncate_description`, which shortens every
  description in a schema tree to a maximum length, cutting at the closest
  sentence boundary (`0` drops descriptions, a negative length leaves them
  alone), and `truncate_string` for a single string.
- `crdgen.ident`: `Package` (an import path, its imports and the errors
  recorded for it), `TypeIdent` and `TypeInfo`.
- `crdgen.flatten`: `Flattener`, which resolves `#/definitions/...`
  references between type schemata while keeping field-level docs and
  validation, `flatten_embedded`, which folds `allOf` branches into their
  containing schema where possible, and `ref_parts`.
- `crdgen.parser`: `Parser`, which indexes packages through a collector,
  builds a schema per type and assembles full CRDs with `need_crd_for`.
- `crdgen.spec`: `merge_identical_version_info`, `to_trivial_versions` and
  `pluralize`.
- `crdgen.markers.crd`: CRD-level markers (`SubresourceStatus`,
  `SubresourceScale`, `PrintColumn`, `Resource`, `StorageVersion`,
  `SkipVersion`), listed by name in `CRD_MARKERS`.
- `crdgen.markers.validation`: validation markers (`Maximum`, `Minimum`,
  `ExclusiveMaximum`, `ExclusiveMinimum`, `MultipleOf`, `MaxLength`,
  `MinLength`, `Pattern`, `MaxItems`, `MinItems`, `UniqueItems`, `Enum`,
  `Format`, `Type`, `Nullable`), listed by name in `VALIDATION_MARKERS` and
  `FIELD_ONLY_MARKERS`.
- `crdgen.known_types`: `add_known_types`, which registers the overrides in
  `KNOWN_PACKAGES` for well-known types such as `ObjectMeta`, `Time`,
  `Quantity` and `IntOrString`.

## Examples

Truncating descriptions:

```python
from crdgen.schema import JSONSchemaProps
from crdgen.description import truncate_description

schema = JSONSchemaProps(
    description="This is the top level. There is more. And more to come",
)
truncate_description(schema, 40)
print(schema.description)  # "This is the top level. There is more."
```

Flattening embedded fields:

```python
from crdgen.schema import JSONSchemaProps
from crdgen.flatten import flatten_embedded

class Errors:
    def __init__(self):
        self.errors = []

    def add_error(self, err):
        self.errors.append(err)

errors = Errors()
merged = flatten_embedded(
    JSONSchemaProps(all_of=[JSONSchemaProps(type="string"),
                            JSONSchemaProps(pattern="^[abc]$")]),
    errors,
)
print(merged.type, merged.pattern)  # string ^[abc]$
```

Building a CRD. The parser asks a collector for each package's markers
(`package_markers`) and its types (`each_type`); by default a type's schema
is taken from `TypeInfo.type_expr`, which must be a `JSONSchemaProps`:

```python
from crdgen.ident import Package, TypeInfo
from crdgen.markers.crd import SubresourceStatus
from crdgen.parser import Parser
from crdgen.resources import GroupKind
from crdgen.schema import JSONSchemaProps

class Collector:
    def package_markers(self, package):
        return {"groupName": ["example.com"]}

    def each_type(self, package):
        yield TypeInfo(
            name="Widget",
            doc="Widget is a widget.",
            markers={"kubebuilder:subresource:status": [SubresourceStatus()]},
            type_expr=JSONSchemaProps(
                type="object",
                properties={"size": JSONSchemaProps(type="integer")},
            ),
        )

package = Package("example.com/api/v1", name="v1")
parser = Parser(Collector())
parser.need_package(package)

group_kind = GroupKind(group="example.com", kind="Widget")
parser.need_crd_for(group_kind)
crd = parser.custom_resource_definitions[group_kind]
print(crd.name)                      # widgets.example.com
print(crd.spec.versions[0].storage)  # True
```

Errors found along the way are recorded on the `Package` they concern
(`package.errors`) rather than raised.

## What it does not do

`crdgen` works on type descriptions that are handed to it. It does not read
or type-check source code, it has no command-line tool, and it does not
write CRDs out as YAML or JSON files; serialising the resulting
`CustomResourceDefinition` objects is up to the caller.

## Running the tests

```
pip install .[test]
pytest
```