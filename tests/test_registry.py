from textwrap import dedent

from classview.java_parse import JavaParser
from classview.model import ClassRecord
from classview.registry import ClassRegistry, base_type_name


def test_base_type_name():
	assert base_type_name("Map<String, Foo>") == "Map"
	assert base_type_name("Foo[]") == "Foo"
	assert base_type_name("Foo[][]") == "Foo"
	assert base_type_name("Foo...") == "Foo"
	assert base_type_name("a.b.Foo") == "a.b.Foo"
	assert base_type_name("") is None
	assert base_type_name(None) is None


def test_registry_is_ordered_and_first_wins():
	registry = ClassRegistry()
	first = ClassRecord(package_path="p", name="A", kind="class", source="one")
	assert registry.add(first)
	assert registry.add(ClassRecord(package_path="p", name="B", kind="enum"))
	assert not registry.add(ClassRecord(package_path="p", name="A", kind="interface"))
	assert len(registry) == 2
	assert "p.A" in registry
	assert registry.get("p.A") is first
	assert [r.full_name for r in registry] == ["p.A", "p.B"]
	assert registry.get(None) is None


def test_import_resolution_depends_on_registration():
	parser = JavaParser()
	parser.parse("import a.b.Foo; class A { Foo f; }")
	a = parser.registry.get("A")
	assert parser.registry.resolve_class(a, "Foo") is None
	parser.parse("package a.b; public class Foo {}")
	assert parser.registry.resolve_class(a, "Foo") is parser.registry.get("a.b.Foo")


def test_same_package_and_outer_scope_resolution():
	code = dedent(
		"""
		package p;
		class A {
			class Inner {
				class Deeper {}
			}
		}
		"""
	)
	parser = JavaParser()
	parser.parse(code)
	parser.parse("package p; class B {}")
	registry = parser.registry
	deeper = registry.get("p.A.Inner.Deeper")
	assert registry.resolve_class(deeper, "B") is registry.get("p.B")
	assert registry.resolve_class(deeper, "Inner") is registry.get("p.A.Inner")
	assert registry.resolve_class(deeper, "Missing") is None
	assert registry.resolve_class(deeper, "") is None
	assert registry.resolve_class(deeper, None) is None


def test_super_class_and_interfaces_ignore_generic_arguments():
	code = dedent(
		"""
		package p;
		interface Shape {}
		interface Named<T> {}
		class Base<T> {}
		class Circle extends Base<String> implements Unknown, Shape, Named<Circle> {}
		"""
	)
	parser = JavaParser()
	parser.parse(code)
	registry = parser.registry
	circle = registry.get("p.Circle")
	assert circle.interface_names == ("Unknown", "Shape", "Named<Circle>")
	assert registry.super_class(circle) is registry.get("p.Base")
	assert [i.full_name for i in registry.interfaces(circle)] == ["p.Shape", "p.Named"]
	assert registry.super_class(registry.get("p.Shape")) is None
