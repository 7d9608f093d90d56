from textwrap import dedent

import pytest

from classview.errors import ErrorCode, SourceError
from classview.java_parse import JavaParser
from classview.model import Accessibility
from classview.registry import ClassRegistry


def _parse(code):
	parser = JavaParser()
	records = parser.parse(dedent(code))
	return parser, records


def test_parse_simple_class():
	parser, records = _parse("package p; class A { int x; void m(int y) { int z; } }")
	assert [r.full_name for r in records] == ["p.A"]
	a = parser.registry.get("p.A")
	assert a.kind == "class"
	assert [(f.name, f.type_name, f.accessibility) for f in a.fields] == [
		("x", "int", Accessibility.PACKAGE)
	]
	(m,) = a.methods
	assert m.name == "m"
	assert m.type_name == "void"
	assert [(p.name, p.type_name) for p in m.parameters] == [("y", "int")]
	assert [(v.name, v.type_name) for v in m.variables] == [("z", "int")]


def test_nested_class_and_outer():
	parser, records = _parse("class Outer { class Inner {} }")
	assert [r.full_name for r in records] == ["Outer.Inner", "Outer"]
	inner = parser.registry.get("Outer.Inner")
	assert inner.outer_name == "Outer"
	assert parser.registry.outer_class(inner) is parser.registry.get("Outer")
	assert parser.registry.outer_class(parser.registry.get("Outer")) is None


def test_enum_constants_are_untyped_public_fields():
	parser, _ = _parse("enum E { A, B, C }")
	e = parser.registry.get("E")
	assert e.kind == "enum"
	assert [(f.name, f.type_name, f.accessibility) for f in e.fields] == [
		("A", None, Accessibility.PUBLIC),
		("B", None, Accessibility.PUBLIC),
		("C", None, Accessibility.PUBLIC),
	]


def test_enum_with_constructor_and_constant_bodies():
	code = """
	enum Planet {
		EARTH(1.0, 2.0), MARS(3.0);
		private final double mass;
		Planet(double mass) { this.mass = mass; }
	}
	"""
	parser, _ = _parse(code)
	planet = parser.registry.get("Planet")
	assert [f.name for f in planet.fields] == ["EARTH", "MARS", "mass"]
	(ctor,) = planet.methods
	assert ctor.name == "Planet"
	assert ctor.is_constructor
	assert [(p.name, p.type_name) for p in ctor.parameters] == [("mass", "double")]


def test_multi_declarator_field():
	parser, _ = _parse("class A { private final int a, b = 2; }")
	fields = parser.registry.get("A").fields
	assert [f.name for f in fields] == ["a", "b"]
	for f in fields:
		assert f.type_name == "int"
		assert f.accessibility is Accessibility.PRIVATE
		assert f.is_final
		assert not f.is_static


def test_commented_and_quoted_classes_register_nothing():
	code = """
	// class Fake {}
	/* class AlsoFake {} */
	class Real { String s = "class Quoted {}"; }
	"""
	parser, _ = _parse(code)
	assert [r.full_name for r in parser.registry] == ["Real"]


def test_parsing_is_deterministic():
	code = dedent(
		"""
		package p;
		import q.Ext;
		public class A extends Ext implements Runnable {
			static class B {}
			public void run() { int i; }
		}
		enum C { X, Y }
		"""
	)
	first = JavaParser(ClassRegistry())
	second = JavaParser(ClassRegistry())
	first.parse(code)
	second.parse(code)
	assert [r.model_dump() for r in first.registry] == [r.model_dump() for r in second.registry]
	assert [r.full_name for r in first.registry] == ["p.A.B", "p.A", "p.C"]


def test_varargs_and_array_parameters():
	parser, _ = _parse("class A { void f(String... args) {} void g(int x[]) {} }")
	f, g = parser.registry.get("A").methods
	assert [(p.name, p.type_name) for p in f.parameters] == [("args", "String...")]
	assert [(p.name, p.type_name) for p in g.parameters] == [("x", "int[]")]


def test_array_suffix_on_field_name():
	parser, _ = _parse("class A { int x[]; String[] names; }")
	assert [(f.name, f.type_name) for f in parser.registry.get("A").fields] == [
		("x", "int[]"),
		("names", "String[]"),
	]


def test_final_parameter_and_modifiers():
	parser, _ = _parse("class A { public static final int f(final long k, int j) { return 0; } }")
	(m,) = parser.registry.get("A").methods
	assert m.accessibility is Accessibility.PUBLIC
	assert m.is_static and m.is_final
	assert [(p.name, p.is_final) for p in m.parameters] == [("k", True), ("j", False)]
	assert m.variables == ()


def test_extends_and_implements():
	parser, _ = _parse("public class B extends A implements I, J<String> {}")
	b = parser.registry.get("B")
	assert b.super_name == "A"
	assert b.interface_names == ("I", "J<String>")


def test_type_parameters_are_not_part_of_the_name():
	parser, _ = _parse("class Box<T extends Comparable<T>> extends Base { T value; }")
	box = parser.registry.get("Box")
	assert box is not None
	assert box.super_name == "Base"
	assert [(f.name, f.type_name) for f in box.fields] == [("value", "T")]


def test_generic_method_type_parameters_are_skipped():
	parser, _ = _parse("class A { public <T> T get(Class<T> type) { return null; } }")
	(m,) = parser.registry.get("A").methods
	assert (m.name, m.type_name) == ("get", "T")
	assert [(p.name, p.type_name) for p in m.parameters] == [("type", "Class<T>")]
	assert parser.registry.get("A").fields == ()


def test_static_generic_methods_keep_their_modifiers():
	code = """
	class F {
		static <K, V> Map<K, V> make() { return null; }
		public static <T extends Comparable<T>> T max(List<T> items) { return null; }
	}
	"""
	parser, _ = _parse(code)
	f = parser.registry.get("F")
	assert f.fields == ()
	assert [(m.name, m.type_name, m.is_static) for m in f.methods] == [
		("make", "Map<K,V>", True),
		("max", "T", True),
	]
	assert f.methods[1].accessibility is Accessibility.PUBLIC
	assert [(p.name, p.type_name) for p in f.methods[1].parameters] == [("items", "List<T>")]


def test_type_lists_starting_with_generic_type_are_complete():
	code = """
	interface Serializable {}
	class N implements Map<K, V>, Serializable {}
	interface Pair extends Comparable<Pair>, Cloneable {}
	"""
	parser, _ = _parse(code)
	n = parser.registry.get("N")
	assert n.interface_names == ("Map<K,V>", "Serializable")
	assert [i.full_name for i in parser.registry.interfaces(n)] == ["Serializable"]
	pair = parser.registry.get("Pair")
	assert pair.super_name == "Comparable<Pair>"
	assert pair.interface_names == ("Cloneable",)


def test_interface_methods_have_no_variables():
	parser, _ = _parse("interface Shape { double area(); abstract void draw(int scale); }")
	shape = parser.registry.get("Shape")
	assert shape.kind == "interface"
	assert [(m.name, m.type_name) for m in shape.methods] == [("area", "double"), ("draw", "void")]
	assert all(m.variables == () for m in shape.methods)


def test_locals_are_harvested_from_nested_blocks_in_order():
	code = """
	class A {
		void m(java.util.List<String> items) {
			int first = 0, second;
			if (items.isEmpty()) {
				String inner;
			}
			for (String s : items) {
				final long total = 1;
			}
			foo(1);
			first = 2;
			return;
		}
	}
	"""
	parser, _ = _parse(code)
	(m,) = parser.registry.get("A").methods
	assert [(v.name, v.type_name, v.is_final) for v in m.variables] == [
		("first", "int", False),
		("second", "int", False),
		("inner", "String", False),
		("total", "long", True),
	]


def test_anonymous_class_bodies_are_not_harvested():
	code = """
	class A {
		void m() {
			Runnable r = new Runnable() { public void run() { int hidden; } };
			new Thread() { int alsoHidden; };
			int visible;
		}
	}
	"""
	parser, _ = _parse(code)
	(m,) = parser.registry.get("A").methods
	assert [v.name for v in m.variables] == ["r", "visible"]


def test_local_class_gets_its_own_record():
	code = """
	package p;
	class A {
		void m() {
			class Local { int q; }
			int z;
		}
	}
	"""
	parser, records = _parse(code)
	assert [r.full_name for r in records] == ["p.A.Local", "p.A"]
	local = parser.registry.get("p.A.Local")
	assert local.outer_name == "A"
	assert [f.name for f in local.fields] == ["q"]
	(m,) = parser.registry.get("p.A").methods
	assert [v.name for v in m.variables] == ["z"]


def test_imports_and_nested_names_reach_builders():
	code = """
	package p;
	import a.b.Foo;
	import java.util.*;
	class A {
		class Inner {}
	}
	"""
	parser, _ = _parse(code)
	a = parser.registry.get("p.A")
	inner = parser.registry.get("p.A.Inner")
	assert a.imports["Foo"] == "a.b.Foo"
	assert a.imports["A"] == "p.A"
	assert a.imports["Inner"] == "p.A.Inner"
	assert inner.imports["Inner"] == "p.A.Inner"
	assert inner.imports["Foo"] == "a.b.Foo"


def test_each_parse_starts_with_fresh_package_and_imports():
	parser = JavaParser()
	parser.parse("package p; import x.Foo; class A {}")
	parser.parse("class B {}")
	b = parser.registry.get("B")
	assert b.package_path == ""
	assert "Foo" not in b.imports


def test_duplicate_type_keeps_first_record():
	parser = JavaParser()
	assert [r.full_name for r in parser.parse("class A { int first; }", source="one.java")] == ["A"]
	assert parser.parse("class A { int second; }", source="two.java") == []
	a = parser.registry.get("A")
	assert [f.name for f in a.fields] == ["first"]
	assert a.source == "one.java"


def test_invalid_field_names_are_skipped():
	parser, _ = _parse("class A { int ok, 9bad; static { counter = 1; } }")
	assert [f.name for f in parser.registry.get("A").fields] == ["ok"]


def test_members_outside_any_type_are_ignored():
	parser, records = _parse(
		"""
		int x;
		void m() { int y; }
		class A {}
		"""
	)
	assert [r.full_name for r in records] == ["A"]
	assert parser.registry.get("A").fields == ()
	assert len(parser.registry) == 1


def test_parse_file_records_source(tmp_path):
	path = tmp_path / "A.java"
	path.write_text("package p; class A {}", encoding="utf-8")
	parser = JavaParser()
	(record,) = parser.parse_file(path)
	assert record.source == str(path)


def test_parse_file_missing_raises_source_error(tmp_path):
	parser = JavaParser()
	with pytest.raises(SourceError) as info:
		parser.parse_file(tmp_path / "Missing.java")
	assert info.value.code is ErrorCode.SOURCE_READ_FAILED
