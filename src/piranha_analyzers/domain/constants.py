"""Well-known type names and rule identifiers. Immutable, shared by every pass."""

REGISTRY_PREFIX = "piranha."

# Marker annotations
REGION_ATTRIBUTE: str = "piranha.extend.RegionAttribute"
FIELD_ATTRIBUTE: str = "piranha.extend.FieldAttribute"

# A complex region and a single-field region use the same marker.
COMPLEX_REGION_MARKER: str = REGION_ATTRIBUTE
SIMPLE_REGION_MARKER: str = REGION_ATTRIBUTE
FIELD_MARKER: str = FIELD_ATTRIBUTE

# Built-in field types that are primarily intended for complex regions.
BUILTIN_FIELD_TYPES: tuple[str, ...] = (
    "piranha.extend.fields.AudioField",
    "piranha.extend.fields.CheckBoxField",
    "piranha.extend.fields.DateField",
    "piranha.extend.fields.DocumentField",
    "piranha.extend.fields.ImageField",
    "piranha.extend.fields.MediaField",
    "piranha.extend.fields.NumberField",
    "piranha.extend.fields.PageField",
    "piranha.extend.fields.PostField",
    "piranha.extend.fields.StringField",
    "piranha.extend.fields.VideoField",
)

NON_SINGLE_FIELD_REGION: str = "PA0001"
INVALID_SINGLE_FIELD_COMPLEX_REGION: str = "PA0002"

ALL_RULE_IDS: frozenset[str] = frozenset(
    {NON_SINGLE_FIELD_REGION, INVALID_SINGLE_FIELD_COMPLEX_REGION}
)

USAGE_CATEGORY: str = "Usage"

# Modules whose Annotated / Optional / Union the declared-type resolver sees through.
TYPING_MODULES: frozenset[str] = frozenset({"typing", "typing_extensions"})
PROPERTY_DECORATORS: frozenset[str] = frozenset(
    {"builtins.property", "functools.cached_property"}
)

# Header markers of generated sources.
GENERATED_MARKERS: tuple[str, ...] = ("@generated", "DO NOT EDIT", "<auto-generated")
GENERATED_HEADER_LINES: int = 5
