import pytest

from tsbind.attributes import (
    DeriveError,
    EnumAttr,
    FieldAttr,
    Inflection,
    Representation,
    StructAttr,
    Tagged,
    parse_attribute_args,
)


# --- argument parsing -------------------------------------------------------


def test_parse_args_keys_and_values():
    assert parse_attribute_args('rename = "bb", inline') == [("rename", "bb"), ("inline", None)]


def test_parse_args_keyword_key():
    assert parse_attribute_args('type = "0 | 1 | 2"') == [("type", "0 | 1 | 2")]


def test_parse_args_escaped_quote():
    assert parse_attribute_args(r'rename = "a\"b"') == [("rename", 'a"b')]


def test_parse_args_raw_string():
    assert parse_attribute_args('rename = r#"x"y"#') == [("rename", 'x"y')]


@pytest.mark.parametrize("text", ["", "   ", "rename,", ", rename"])
def test_parse_args_requires_identifier(text):
    with pytest.raises(DeriveError, match="expected identifier"):
        parse_attribute_args(text)


def test_parse_args_rejects_non_string_literal():
    with pytest.raises(DeriveError, match="expected string"):
        parse_attribute_args("rename = 5")


def test_parse_args_requires_separator():
    with pytest.raises(DeriveError, match="expected `,`"):
        parse_attribute_args("inline skip")


# --- inflection -------------------------------------------------------------


@pytest.mark.parametrize(
    ("text", "member"),
    [
        ("lowercase", Inflection.LOWER),
        ("UPPERCASE", Inflection.UPPER),
        ("camelCase", Inflection.CAMEL),
        ("snake_case", Inflection.SNAKE),
        ("PascalCase", Inflection.PASCAL),
        ("SCREAMING_SNAKE_CASE", Inflection.SCREAMING_SNAKE),
    ],
)
def test_inflection_parse(text, member):
    assert Inflection.parse(text) is member


def test_inflection_parse_invalid():
    with pytest.raises(DeriveError, match="invalid inflection: 'kebab-case'"):
        Inflection.parse("kebab-case")


def test_inflection_upper_and_lower():
    assert Inflection.UPPER.apply("a") == "A"
    assert Inflection.LOWER.apply("B") == "b"
    assert Inflection.UPPER.apply("uppercase") == "UPPERCASE"


def test_inflection_snake_of_camel():
    assert Inflection.SNAKE.apply("camelCase") == "camel_case"


@pytest.mark.parametrize("word", ["user_id", "first_name", "last_name", "string_tree", "snake_case"])
def test_inflection_round_trips(word):
    camel = Inflection.CAMEL.apply(word)
    pascal = Inflection.PASCAL.apply(word)
    screaming = Inflection.SCREAMING_SNAKE.apply(word)
    assert "_" not in camel and camel[0].islower()
    assert "_" not in pascal and pascal[0].isupper()
    assert Inflection.SNAKE.apply(camel) == word
    assert Inflection.SNAKE.apply(pascal) == word
    assert Inflection.LOWER.apply(screaming) == word
    assert Inflection.SNAKE.apply(word) == word
    assert pascal[1:] == camel[1:]


# --- struct attributes ------------------------------------------------------


def test_struct_attr_ts():
    attr = StructAttr.parse('rename_all = "UPPERCASE", export, export_to = "bindings/"')
    assert attr.rename_all is Inflection.UPPER
    assert attr.export is True
    assert attr.export_to == "bindings/"
    assert attr.tag is None


def test_struct_attr_ts_rejects_tag():
    with pytest.raises(DeriveError, match="unexpected attribute"):
        StructAttr.parse('tag = "type"')


def test_struct_attr_serde():
    attr = StructAttr.parse_serde('tag = "type", rename_all = "camelCase", default')
    assert attr.tag == "type"
    assert attr.rename_all is Inflection.CAMEL
    assert StructAttr.parse_serde('default = "make"') == StructAttr()


def test_struct_attr_flag_takes_no_value():
    with pytest.raises(DeriveError):
        StructAttr.parse('export = "yes"')


def test_struct_attr_string_needs_value():
    with pytest.raises(DeriveError, match="expected `=`"):
        StructAttr.parse("rename")


def test_struct_attr_first_value_wins():
    attr = StructAttr.from_attrs(['rename = "First"', 'rename = "Second", export'], ['rename = "Third"'])
    assert attr.rename == "First"
    assert attr.export is True


def test_struct_attr_serde_fills_gaps():
    attr = StructAttr.from_attrs([], ['tag = "type"'])
    assert attr.tag == "type"


def test_struct_attr_bad_ts_raises():
    with pytest.raises(DeriveError):
        StructAttr.from_attrs(["bogus"], [])


def test_struct_attr_bad_serde_is_ignored_with_warning(capsys):
    attr = StructAttr.from_attrs([], ["deny_unknown_fields", 'rename = "Kept"'])
    assert attr.rename == "Kept"
    err = capsys.readouterr().err
    assert "failed to parse serde attribute" in err
    assert "deny_unknown_fields" in err


# --- field attributes -------------------------------------------------------


def test_field_attr_ts():
    attr = FieldAttr.parse('type = "string", rename = "bb", inline, skip, optional, flatten')
    assert attr == FieldAttr(
        type_override="string", rename="bb", inline=True, skip=True, optional=True, flatten=True
    )


@pytest.mark.parametrize("key", ["skip", "skip_serializing", "skip_deserializing"])
def test_field_attr_serde_skips(key):
    assert FieldAttr.parse_serde(key).skip is True


def test_field_attr_skip_serializing_if():
    assert FieldAttr.parse_serde('skip_serializing_if = "Option::is_none"').optional is True
    assert FieldAttr.parse_serde('skip_serializing_if = "Vec::is_empty"').optional is False


def test_field_attr_serde_rejects_type():
    with pytest.raises(DeriveError, match="unexpected attribute"):
        FieldAttr.parse_serde('type = "string"')


def test_field_attr_merge_ors_flags():
    attr = FieldAttr.from_attrs(["inline"], ['flatten, rename = "a/b"'])
    assert attr.inline and attr.flatten
    assert attr.rename == "a/b"
    assert not attr.skip


def test_field_attr_merge_method():
    first = FieldAttr(rename="bb")
    first.merge(FieldAttr(rename="cc", optional=True, type_override="string"))
    assert first == FieldAttr(rename="bb", optional=True, type_override="string")


# --- enum attributes --------------------------------------------------------


def test_enum_attr_ts():
    attr = EnumAttr.parse('rename_all = "lowercase", rename = "SimpleEnum", export')
    assert attr.rename_all is Inflection.LOWER
    assert attr.rename == "SimpleEnum"
    assert attr.export is True


def test_enum_attr_ts_rejects_untagged():
    with pytest.raises(DeriveError, match="unexpected attribute"):
        EnumAttr.parse("untagged")


def test_tagged_externally():
    assert EnumAttr().tagged() == Tagged(Representation.EXTERNALLY)


def test_tagged_internally():
    attr = EnumAttr.from_attrs([], ['tag = "type"'])
    assert attr.tagged() == Tagged(Representation.INTERNALLY, tag="type")


def test_tagged_adjacently():
    attr = EnumAttr.from_attrs([], ['tag = "kind", content = "data"'])
    assert attr.tagged() == Tagged(Representation.ADJACENTLY, tag="kind", content="data")


def test_tagged_untagged():
    attr = EnumAttr.from_attrs([], ["untagged"])
    assert attr.tagged() == Tagged(Representation.UNTAGGED)


@pytest.mark.parametrize(
    ("serde", "message"),
    [
        ('untagged, tag = "kind"', "untagged cannot be used with tag"),
        ('untagged, content = "d"', "untagged cannot be used with content"),
        ('untagged, tag = "kind", content = "d"', "untagged cannot be used with content"),
        ('content = "d"', "content cannot be used without tag"),
    ],
)
def test_tagged_conflicts(serde, message):
    attr = EnumAttr.from_attrs([], [serde])
    with pytest.raises(DeriveError, match=message):
        attr.tagged()