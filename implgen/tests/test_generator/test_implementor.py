"""Tests for the Implementor facade, subject validation and the file sink."""

from pathlib import Path

import pytest

from implgen.core.errors import (
    ImplementorArgumentError,
    ImplementorError,
    InvalidSubject,
    NoUsableConstructor,
    RenderFailure,
    TypeResolutionError,
)
from implgen.core.generator import FileOutputSink, Implementor
from implgen.core.generator.implementor import normalize_type_name


SOURCES = {
    "com/example/Greeter.java": '''
        package com.example;

        public interface Greeter {
            String greet(String name);
        }
    ''',
    "com/example/Locked.java": '''
        package com.example;

        public abstract class Locked {
            private Locked() {
            }

            public abstract void open();
        }
    ''',
    "com/example/Done.java": '''
        package com.example;

        public final class Done {
        }
    ''',
    "com/example/Mode.java": '''
        package com.example;

        public enum Mode {
            ON, OFF
        }
    ''',
    "com/example/Outer.java": '''
        package com.example;

        public class Outer {
            public interface Listener {
                void changed(int value);
            }

            private interface Secret {
                void hide();
            }
        }
    ''',
    "com/example/Shape.java": '''
        package com.example;

        public sealed interface Shape permits Circle {
        }
    ''',
}


@pytest.fixture
def implementor(make_index):
    return Implementor(make_index(SOURCES))


class TestNormalizeTypeName:
    def test_plain_name(self):
        assert normalize_type_name("com.example.Greeter") == "com.example.Greeter"

    def test_dollar_kept_as_written(self):
        assert normalize_type_name("com.example.Outer$Listener") == "com.example.Outer$Listener"
        assert normalize_type_name("a.Foo$Bar") == "a.Foo$Bar"

    def test_none(self):
        with pytest.raises(ImplementorArgumentError):
            normalize_type_name(None)

    @pytest.mark.parametrize("name", ["", "   ", "com..Greeter", "com.example.1st", "com.class.Foo"])
    def test_malformed(self, name):
        with pytest.raises(ImplementorArgumentError):
            normalize_type_name(name)

    @pytest.mark.parametrize("name", ["int", "void", "boolean", "int[]", "java.lang.String[]", "[I"])
    def test_primitives_and_arrays(self, name):
        with pytest.raises(InvalidSubject):
            normalize_type_name(name)

    @pytest.mark.parametrize("name", ["java.lang.Object", "java.lang.Enum", "java.lang.Record"])
    def test_hierarchy_roots(self, name):
        with pytest.raises(InvalidSubject):
            normalize_type_name(name)


class TestImplement:
    def test_writes_file_under_package_dirs(self, implementor, tmp_path):
        out = tmp_path / "out"
        path = implementor.implement("com.example.Greeter", out)
        assert path == out / "com" / "example" / "GreeterImpl.java"
        text = path.read_text(encoding="ascii")
        assert text.startswith("package com.example;\n")
        assert "public java.lang.String greet(java.lang.String name) {\n        return null;\n    }" in text

    def test_nested_type(self, implementor, tmp_path):
        path = implementor.implement("com.example.Outer$Listener", tmp_path)
        assert path == tmp_path / "com" / "example" / "ListenerImpl.java"
        assert "implements com.example.Outer.Listener {" in path.read_text(encoding="ascii")

    def test_dollar_in_top_level_name(self, make_index, tmp_path):
        sources = dict(SOURCES)
        sources["com/example/Foo$Bar.java"] = '''
            package com.example;

            public interface Foo$Bar {
                void go();
            }
        '''
        path = Implementor(make_index(sources)).implement("com.example.Foo$Bar", tmp_path)
        assert path == tmp_path / "com" / "example" / "Foo$BarImpl.java"
        text = path.read_text(encoding="ascii")
        assert "public class Foo$BarImpl implements com.example.Foo$Bar {" in text

    def test_accepts_string_root(self, implementor, tmp_path):
        path = implementor.implement("com.example.Greeter", str(tmp_path))
        assert path.is_file()

    def test_overwrites_existing_file(self, implementor, tmp_path):
        target = tmp_path / "com" / "example" / "GreeterImpl.java"
        target.parent.mkdir(parents=True)
        target.write_text("stale")
        implementor.implement("com.example.Greeter", tmp_path)
        assert "stale" not in target.read_text(encoding="ascii")

    def test_null_arguments(self, implementor, tmp_path):
        with pytest.raises(ImplementorArgumentError, match="Non null"):
            implementor.implement(None, tmp_path)
        with pytest.raises(ImplementorArgumentError, match="Non null"):
            implementor.implement("com.example.Greeter", None)

    def test_custom_suffix(self, make_index, tmp_path):
        implementor = Implementor(make_index(SOURCES), class_suffix="Stub")
        path = implementor.implement("com.example.Greeter", tmp_path)
        assert path.name == "GreeterStub.java"


class TestRejectedSubjects:
    def test_only_private_constructors(self, implementor, tmp_path):
        with pytest.raises(NoUsableConstructor):
            implementor.implement("com.example.Locked", tmp_path)
        assert not any(tmp_path.rglob("*.java"))

    def test_primitive_rejected_before_lookup(self, tmp_path):
        class ExplodingIndex:
            def describe(self, name):
                raise AssertionError("index must not be consulted")

        implementor = Implementor(ExplodingIndex())
        with pytest.raises(InvalidSubject):
            implementor.implement("int", tmp_path)
        with pytest.raises(InvalidSubject):
            implementor.implement("com.example.Greeter[]", tmp_path)

    @pytest.mark.parametrize("name, reason", [
        ("com.example.Done", "final"),
        ("com.example.Mode", "enum"),
        ("com.example.Outer.Secret", "private"),
        ("com.example.Shape", "sealed"),
    ])
    def test_invalid_subjects(self, implementor, tmp_path, name, reason):
        with pytest.raises(InvalidSubject, match=reason):
            implementor.implement(name, tmp_path)

    def test_unknown_type(self, implementor, tmp_path):
        with pytest.raises(TypeResolutionError):
            implementor.implement("com.example.Missing", tmp_path)

    def test_all_failures_share_base_class(self, implementor, tmp_path):
        for name in ("int", "com.example.Missing", "com.example.Locked", "com.example.Done"):
            with pytest.raises(ImplementorError):
                implementor.implement(name, tmp_path)


class TestFileOutputSink:
    def test_creates_directories(self, tmp_path):
        path = tmp_path / "a" / "b" / "X.java"
        FileOutputSink().write("class X {}\n", path)
        assert path.read_text(encoding="ascii") == "class X {}\n"

    def test_non_ascii_text_is_rejected_and_removed(self, tmp_path):
        path = tmp_path / "X.java"
        with pytest.raises(RenderFailure):
            FileOutputSink().write("class É {}\n", path)
        assert not path.exists()

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        with pytest.raises(RenderFailure, match="creating directories"):
            FileOutputSink().write("x", blocker / "pkg" / "X.java")

    def test_sink_failure_surfaces_from_implement(self, make_index, tmp_path):
        class FailingSink(FileOutputSink):
            def write(self, text: str, path: Path) -> None:
                raise RenderFailure(f"cannot write {path}")

        implementor = Implementor(make_index(SOURCES), sink=FailingSink())
        with pytest.raises(RenderFailure, match="GreeterImpl.java"):
            implementor.implement("com.example.Greeter", tmp_path)
