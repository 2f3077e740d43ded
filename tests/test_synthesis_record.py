from __future__ import annotations

from pathlib import Path
import sys
import textwrap


def _load():
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from fixturegen.declarations import Visibility
    from fixturegen.synthesis.model import SynthesisConfig
    from fixturegen.synthesis.synthesizer import DeclarationSynthesizer
    from tests import declaration_helpers as helpers

    return Visibility, SynthesisConfig, DeclarationSynthesizer, helpers


def _synth(wrap_debug_guard: bool = False):
    _, SynthesisConfig, DeclarationSynthesizer, _ = _load()
    return DeclarationSynthesizer(config=SynthesisConfig(wrap_debug_guard=wrap_debug_guard))


def _user(h):
    return h.record(
        "User",
        h.prop("id", "String"),
        h.prop("age", "Int"),
        h.prop("isAdmin", "Bool"),
    )


def test_record_expansion_renders_full_extension() -> None:
    _, _, _, h = _load()
    result = _synth().synthesize(_user(h))
    assert result.ok
    assert len(result.fragments) == 1
    expected = textwrap.dedent(
        """
        extension User: Fixtureable {
            init(fixtureid: String, fixtureage: Int, fixtureisAdmin: Bool) {
                id = fixtureid
                age = fixtureage
                isAdmin = fixtureisAdmin
            }
            static var fixture: Self {
                .init(fixtureid: .fixture, fixtureage: .fixture, fixtureisAdmin: .fixture)
            }
            struct FixtureBuilder {
                var id: String = .fixture
                var age: Int = .fixture
                var isAdmin: Bool = .fixture
            }
            static func fixture(_ configure: (inout FixtureBuilder) -> Void) -> Self {
                var builder = FixtureBuilder()
                configure(&builder)
                return .init(fixtureid: builder.id, fixtureage: builder.age, fixtureisAdmin: builder.isAdmin)
            }
        }
        """
    ).strip()
    assert result.fragments[0].code == expected


def test_record_members_are_emitted_in_fixed_order() -> None:
    _, _, _, h = _load()
    (fragment,) = _synth().synthesize(_user(h)).fragments
    assert [m.kind for m in fragment.members] == [
        "initializer",
        "fixture_property",
        "builder",
        "factory",
    ]


def test_field_order_is_preserved_in_every_member() -> None:
    _, _, _, h = _load()
    names = ["zeta", "alpha", "mid", "beta"]
    decl = h.record("Ordered", *[h.prop(name, "Int") for name in names])
    (fragment,) = _synth().synthesize(decl).fragments
    init = fragment.member("initializer")
    builder = fragment.member("builder")
    factory = fragment.member("factory")
    assert [f.name for f in init.fields] == names
    assert init.parameters == [f"fixture{name}: Int" for name in names]
    assert [f.name for f in builder.fields] == names
    assert factory.arguments == [f"fixture{name}: builder.{name}" for name in names]
    prop = fragment.member("fixture_property")
    assert prop.expression == ".init(" + ", ".join(
        f"fixture{name}: .fixture" for name in names
    ) + ")"


def test_defaulted_fields_are_omitted_from_fixture_property() -> None:
    _, _, _, h = _load()
    decl = h.record(
        "Config",
        h.prop("timeout", "Int", default="30"),
        h.prop("name", "String"),
    )
    (fragment,) = _synth().synthesize(decl).fragments
    init = fragment.member("initializer")
    assert init.parameters == ["fixturetimeout: Int = .fixture", "fixturename: String"]
    assert fragment.member("fixture_property").expression == ".init(fixturename: .fixture)"
    code = fragment.code
    assert "var timeout: Int = .fixture" in code
    assert "return .init(fixturetimeout: builder.timeout, fixturename: builder.name)" in code


def test_all_defaulted_fields_produce_empty_fixture_call() -> None:
    _, _, _, h = _load()
    decl = h.record(
        "Retry",
        h.prop("count", "Int", default="3"),
    )
    (fragment,) = _synth().synthesize(decl).fragments
    assert fragment.member("fixture_property").expression == ".init()"


def test_record_without_stored_fields_skips_initializer() -> None:
    _, _, _, h = _load()
    decl = h.record(
        "Counter",
        h.prop("count", "Int", accessors=("didSet",)),
    )
    (fragment,) = _synth().synthesize(decl).fragments
    assert fragment.member("initializer") is None
    expected = textwrap.dedent(
        """
        extension Counter: Fixtureable {
            static var fixture: Self {
                .init()
            }
            struct FixtureBuilder {
            }
            static func fixture(_ configure: (inout FixtureBuilder) -> Void) -> Self {
                var builder = FixtureBuilder()
                configure(&builder)
                return .init()
            }
        }
        """
    ).strip()
    assert fragment.code == expected


def test_public_record_with_public_fields_gets_builder_init() -> None:
    _, _, _, h = _load()
    decl = h.record(
        "User",
        h.prop("name", "String", modifiers=("public",)),
        modifiers=("public",),
    )
    (fragment,) = _synth().synthesize(decl).fragments
    expected = textwrap.dedent(
        """
        extension User: Fixtureable {
            public init(fixturename: String) {
                name = fixturename
            }
            public static var fixture: Self {
                .init(fixturename: .fixture)
            }
            public struct FixtureBuilder {
                public var name: String = .fixture
                public init() {
                }
            }
            public static func fixture(_ configure: (inout FixtureBuilder) -> Void) -> Self {
                var builder = FixtureBuilder()
                configure(&builder)
                return .init(fixturename: builder.name)
            }
        }
        """
    ).strip()
    assert fragment.code == expected


def test_fixture_property_keeps_type_visibility_when_fields_are_narrower() -> None:
    Visibility, _, _, h = _load()
    decl = h.record(
        "Account",
        h.prop("id", "String", modifiers=("public",)),
        h.prop("secret", "Token", modifiers=("private",)),
        modifiers=("public",),
    )
    (fragment,) = _synth().synthesize(decl).fragments
    assert fragment.member("fixture_property").visibility is Visibility.PUBLIC
    for kind in ("initializer", "builder", "factory"):
        assert fragment.member(kind).visibility is Visibility.PRIVATE
    assert not fragment.member("builder").explicit_init
    code = fragment.code
    assert "public static var fixture: Self {" in code
    assert "private init(fixtureid: String, fixturesecret: Token) {" in code
    assert "private struct FixtureBuilder {" in code
    assert "private static func fixture(_ configure:" in code


def test_public_record_with_internal_fields_narrows_to_internal() -> None:
    Visibility, _, _, h = _load()
    decl = h.record(
        "User",
        h.prop("name", "String"),
        modifiers=("public",),
    )
    (fragment,) = _synth().synthesize(decl).fragments
    assert fragment.member("fixture_property").visibility is Visibility.PUBLIC
    assert fragment.member("initializer").visibility is None
    assert "\n    init(fixturename: String) {" in fragment.code
    assert "public init()" not in fragment.code


def test_package_visibility_from_enclosing_extension() -> None:
    Visibility, _, _, h = _load()
    decl = h.record(
        "Child",
        h.prop("value", "Int", modifiers=("package",)),
        extended_type="Parent.Child",
        enclosing=Visibility.PACKAGE,
    )
    (fragment,) = _synth().synthesize(decl).fragments
    code = fragment.code
    assert code.startswith("extension Parent.Child: Fixtureable {")
    assert "package static var fixture: Self {" in code
    assert "package struct FixtureBuilder {" in code
    assert "package init() {" in code


def test_type_modifier_overrides_enclosing_visibility() -> None:
    Visibility, _, _, h = _load()
    decl = h.record(
        "Child",
        h.prop("value", "Int"),
        modifiers=("internal",),
        enclosing=Visibility.PUBLIC,
    )
    (fragment,) = _synth().synthesize(decl).fragments
    assert fragment.member("fixture_property").visibility is Visibility.INTERNAL


def test_builder_fields_are_mutable_for_let_fields() -> None:
    _, _, _, h = _load()
    decl = h.record("Token", h.prop("value", "String"))
    code = _synth().synthesize(decl).code
    assert "var value: String = .fixture" in code
    assert "let value" not in code


def test_debug_guard_wraps_members() -> None:
    _, _, _, h = _load()
    decl = h.record("Item", h.prop("name", "String"))
    code = _synth(wrap_debug_guard=True).synthesize(decl).code
    lines = code.splitlines()
    assert lines[0] == "extension Item: Fixtureable {"
    assert lines[1] == "    #if DEBUG"
    assert lines[2] == "    init(fixturename: String) {"
    assert lines[-2] == "    #endif"
    assert lines[-1] == "}"


def test_record_synthesis_is_idempotent() -> None:
    _, _, _, h = _load()
    synth = _synth(wrap_debug_guard=True)
    first = synth.synthesize(_user(h))
    second = synth.synthesize(_user(h))
    assert first.code == second.code
    assert first == second


def test_setter_restriction_does_not_narrow_generated_members() -> None:
    Visibility, _, _, h = _load()
    from fixturegen.declarations import Modifier, VariableDecl

    variable = VariableDecl(
        bindings=h.prop("count", "Int").bindings,
        modifiers=(Modifier(name="public"), Modifier(name="private", detail="set")),
    )
    decl = h.record("Counter", variable, modifiers=("public",))
    (fragment,) = _synth().synthesize(decl).fragments
    for kind in ("initializer", "builder", "factory"):
        assert fragment.member(kind).visibility is Visibility.PUBLIC
    assert "public init(fixturecount: Int) {" in fragment.code


def test_unicode_field_names_reach_generated_code() -> None:
    _, _, _, h = _load()
    decl = h.record("Menu", h.prop("café", "String"))
    code = _synth().synthesize(decl).code
    assert "init(fixturecafé: String) {" in code
    assert "café = fixturecafé" in code
