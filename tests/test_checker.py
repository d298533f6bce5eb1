import unittest

from tinyts import syntax
from tinyts.syntax import (
	TrueLiteral, FalseLiteral, NumberLiteral, If, Add, Var, Func, Call, Seq, Const, RecFunc,
	ObjectNew, ObjectGet, TaggedUnionNew, TaggedUnionGet,
)
from tinyts.calculus import (
	BOOLEAN, NUMBER, BooleanType, NumberType, FuncType, ObjectType, TaggedUnionType,
)
from tinyts.checker import typecheck
from tinyts.environment import null_env
from tinyts.equality import type_eq

def num(n=1): return NumberLiteral(n)

OPTION = TaggedUnionType([
	("some", [("value", NUMBER)]),
	("none", []),
])

class CheckerTestCase(unittest.TestCase):
	
	def assertType(self, expected, term, env=None):
		result = typecheck(term, env)
		assert not result.is_error(), (result.nature, result.guilty)
		assert type_eq(result, expected), (result, expected)
		return result
	
	def assertFails(self, nature, term, env=None, guilty=None):
		result = typecheck(term, env)
		assert result.is_error(), result
		self.assertEqual(nature, result.nature)
		if guilty is not None: self.assertIs(guilty, result.guilty)
		return result

class BasicRuleTests(CheckerTestCase):
	
	def test_literals(self):
		self.assertIsInstance(typecheck(TrueLiteral()), BooleanType)
		self.assertIsInstance(typecheck(FalseLiteral()), BooleanType)
		self.assertIsInstance(typecheck(num(42)), NumberType)
	
	def test_if(self):
		self.assertType(NUMBER, If(TrueLiteral(), num(1), num(2)))
		cond = num()
		self.assertFails("boolean type expected", If(cond, num(1), num(2)), guilty=cond)
		sut = If(TrueLiteral(), num(1), FalseLiteral())
		self.assertFails("then and else have different types", sut, guilty=sut)
	
	def test_add(self):
		self.assertType(NUMBER, Add(num(1), Add(num(2), num(3))))
		left, right = TrueLiteral(), FalseLiteral()
		self.assertFails("number expected", Add(left, num()), guilty=left)
		self.assertFails("number expected", Add(num(), right), guilty=right)
		# The left operand is judged first.
		self.assertFails("number expected", Add(left, right), guilty=left)
	
	def test_var(self):
		self.assertType(BOOLEAN, Var("b"), {"b": BOOLEAN})
		sut = Var("nope")
		self.assertFails("unknown variable: nope", sut, guilty=sut)
	
	def test_errors_propagate_outward(self):
		inner = Var("nope")
		self.assertFails("unknown variable: nope", If(TrueLiteral(), Add(inner, num()), num()), guilty=inner)

class FunctionTests(CheckerTestCase):
	
	def test_func_synthesizes_its_return_type(self):
		sut = Func([("x", NUMBER), ("b", BOOLEAN)], If(Var("b"), Var("x"), num()))
		result = self.assertType(FuncType([("x", NUMBER), ("b", BOOLEAN)], NUMBER), sut)
		self.assertEqual(["x", "b"], [p.name for p in result.params])
	
	def test_parameters_do_not_escape(self):
		sut = Seq(Func([("x", NUMBER)], Var("x")), Var("x"))
		self.assertFails("unknown variable: x", sut)
	
	def test_call(self):
		add = Func([("x", NUMBER), ("y", NUMBER)], Add(Var("x"), Var("y")))
		self.assertType(NUMBER, Call(add, [num(1), num(2)]))
	
	def test_call_needs_a_function(self):
		callee = num()
		self.assertFails("function type expected", Call(callee, []), guilty=callee)
	
	def test_call_arity(self):
		sut = Call(Func([("x", NUMBER)], Var("x")), [num(), num()])
		self.assertFails("wrong number of arguments", sut, guilty=sut)
	
	def test_call_argument_types(self):
		first, second = TrueLiteral(), FalseLiteral()
		sut = Call(Func([("x", NUMBER), ("y", NUMBER)], Var("x")), [first, second])
		self.assertFails("parameter type mismatch", sut, guilty=first)
	
	def test_higher_order_arguments(self):
		twice = Func(
			[("f", FuncType([("n", NUMBER)], NUMBER)), ("x", NUMBER)],
			Call(Var("f"), [Call(Var("f"), [Var("x")])]),
		)
		inc = Func([("y", NUMBER)], Add(Var("y"), num()))
		self.assertType(NUMBER, Call(twice, [inc, num(5)]))
		bad = Func([("y", BOOLEAN)], Var("y"))
		self.assertFails("parameter type mismatch", Call(twice, [bad, num(5)]), guilty=bad)

class RecursionTests(CheckerTestCase):
	
	def test_self_reference(self):
		# function f(x: number): number { return f(x); } f(0)
		sut = RecFunc("f", [("x", NUMBER)], NUMBER, Call(Var("f"), [Var("x")]), Call(Var("f"), [num(0)]))
		self.assertType(NUMBER, sut)
	
	def test_wrong_return_type(self):
		sut = RecFunc("f", [("x", NUMBER)], BOOLEAN, Var("x"), Var("f"))
		self.assertFails("wrong return type", sut, guilty=sut)
	
	def test_body_sees_its_own_signature(self):
		body = Call(Var("f"), [TrueLiteral()])
		sut = RecFunc("f", [("x", NUMBER)], NUMBER, body, num())
		self.assertFails("parameter type mismatch", sut)
	
	def test_continuation_sees_function_but_not_parameters(self):
		sut = RecFunc("f", [("x", NUMBER)], NUMBER, Var("x"), Var("f"))
		self.assertType(FuncType([("x", NUMBER)], NUMBER), sut)
		sut = RecFunc("f", [("x", NUMBER)], NUMBER, Var("x"), Var("x"))
		self.assertFails("unknown variable: x", sut)
	
	def test_mutually_nested(self):
		# function even(n: number): boolean { function odd(m: number): boolean { return even(m); } return odd(n); }
		odd = RecFunc("odd", [("m", NUMBER)], BOOLEAN, Call(Var("even"), [Var("m")]), Call(Var("odd"), [Var("n")]))
		sut = RecFunc("even", [("n", NUMBER)], BOOLEAN, odd, Call(Var("even"), [num(4)]))
		self.assertType(BOOLEAN, sut)

class ScopeTests(CheckerTestCase):
	
	def test_const_binds_over_rest(self):
		self.assertType(NUMBER, Const("x", num(), Var("x")))
	
	def test_const_binding_does_not_escape(self):
		outside = Var("x")
		sut = Seq(Const("x", num(), Var("x")), outside)
		self.assertFails("unknown variable: x", sut, guilty=outside)
	
	def test_seq_discards_the_body_type(self):
		self.assertType(BOOLEAN, Seq(num(), TrueLiteral()))
	
	def test_seq_still_checks_the_body(self):
		self.assertFails("number expected", Seq(Add(num(), TrueLiteral()), num()))
	
	def test_shadowing(self):
		sut = Const("x", num(), Const("x", TrueLiteral(), Var("x")))
		self.assertType(BOOLEAN, sut)
	
	def test_sibling_branches_are_independent(self):
		sut = If(TrueLiteral(), Const("y", num(), Var("y")), Var("y"))
		self.assertFails("unknown variable: y", sut)
	
	def test_callers_environment_is_untouched(self):
		env = null_env.bind("a", NUMBER)
		typecheck(Const("b", TrueLiteral(), Var("b")), env)
		assert "b" not in env
	
	def test_end_to_end(self):
		# const add = (x: number, y: number) => x + y; const x = add(1, add(2, 3)); x;
		add = Func([("x", NUMBER), ("y", NUMBER)], Add(Var("x"), Var("y")))
		call = Call(Var("add"), [num(1), Call(Var("add"), [num(2), num(3)])])
		self.assertType(NUMBER, Const("add", add, Const("x", call, Var("x"))))

class ObjectTests(CheckerTestCase):
	
	def test_object_new_keeps_order(self):
		result = self.assertType(
			ObjectType([("b", BOOLEAN), ("n", NUMBER)]),
			ObjectNew([("n", num()), ("b", TrueLiteral())]),
		)
		self.assertEqual(["n", "b"], [p.name for p in result.props])
	
	def test_object_new_checks_properties_in_order(self):
		first = Var("first")
		self.assertFails("unknown variable: first", ObjectNew([("a", first), ("b", Var("second"))]), guilty=first)
	
	def test_duplicate_property(self):
		sut = ObjectNew([("a", num()), ("a", num())])
		self.assertFails("duplicate property name: a", sut, guilty=sut)
	
	def test_object_get(self):
		obj = ObjectNew([("n", num()), ("b", TrueLiteral())])
		self.assertType(BOOLEAN, ObjectGet(obj, "b"))
		sut = ObjectGet(obj, "c")
		self.assertFails("unknown property name: c", sut, guilty=sut)
		target = num()
		self.assertFails("object type expected", ObjectGet(target, "n"), guilty=target)
	
	def test_objects_as_arguments(self):
		point = ObjectType([("x", NUMBER), ("y", NUMBER)])
		norm = Func([("p", point)], Add(ObjectGet(Var("p"), "x"), ObjectGet(Var("p"), "y")))
		self.assertType(NUMBER, Call(norm, [ObjectNew([("y", num()), ("x", num())])]))
		short = ObjectNew([("x", num())])
		self.assertFails("parameter type mismatch", Call(norm, [short]), guilty=short)

class TaggedUnionTests(CheckerTestCase):
	
	def test_construction(self):
		sut = TaggedUnionNew("some", [("value", num())], OPTION)
		self.assertIs(OPTION, typecheck(sut))
		self.assertIs(OPTION, typecheck(TaggedUnionNew("none", [], OPTION)))
	
	def test_construction_needs_a_union(self):
		sut = TaggedUnionNew("some", [], NUMBER)
		self.assertFails('"as" must have a tagged union type', sut, guilty=sut)
	
	def test_unknown_label(self):
		sut = TaggedUnionNew("maybe", [], OPTION)
		self.assertFails("unknown variant label: maybe", sut, guilty=sut)
	
	def test_unknown_property(self):
		sut = TaggedUnionNew("some", [("value", num()), ("extra", num())], OPTION)
		self.assertFails("unknown property name: extra", sut, guilty=sut)
	
	def test_property_type_mismatch(self):
		sut = TaggedUnionNew("some", [("value", TrueLiteral())], OPTION)
		self.assertFails("property type mismatch for property: value", sut, guilty=sut)
	
	def test_partial_construction_is_rejected(self):
		sut = TaggedUnionNew("some", [], OPTION)
		self.assertFails("missing property name: value", sut, guilty=sut)
	
	def test_duplicate_property(self):
		sut = TaggedUnionNew("some", [("value", num()), ("value", num())], OPTION)
		self.assertFails("duplicate property name: value", sut, guilty=sut)
	
	def _unwrap(self, *clauses):
		return Func([("o", OPTION)], TaggedUnionGet("o", clauses))
	
	def test_match(self):
		sut = self._unwrap(("some", ObjectGet(Var("o"), "value")), ("none", num(0)))
		self.assertType(FuncType([("o", OPTION)], NUMBER), sut)
	
	def test_match_subject_is_rebound_per_clause(self):
		body = ObjectGet(Var("o"), "value")
		sut = self._unwrap(("none", body), ("some", num(0)))
		self.assertFails("unknown property name: value", sut, guilty=body)
	
	def test_match_needs_a_union(self):
		sut = TaggedUnionGet("n", [("some", num())])
		self.assertFails("variable n must have a tagged union type", sut, {"n": NUMBER}, guilty=sut)
	
	def test_match_on_unknown_variable(self):
		sut = TaggedUnionGet("o", [("some", num())])
		self.assertFails("unknown variable: o", sut, guilty=sut)
	
	def test_unknown_case(self):
		body = num()
		sut = self._unwrap(("some", num()), ("maybe", body))
		self.assertFails("tagged union has no case: maybe", sut, guilty=body)
	
	def test_clauses_must_agree(self):
		body = TrueLiteral()
		sut = self._unwrap(("some", num()), ("none", body))
		self.assertFails("clauses has different type", sut, guilty=body)
	
	def test_first_clause_seeds_the_result(self):
		body = num()
		sut = self._unwrap(("some", TrueLiteral()), ("none", body))
		self.assertFails("clauses has different type", sut, guilty=body)
	
	def test_not_exhaustive(self):
		sut = TaggedUnionGet("o", [("some", num())])
		self.assertFails("switch case is not exhaustive", sut, {"o": OPTION}, guilty=sut)
	
	def test_repeated_case_is_rejected(self):
		# Matching {some, some} over {some, none} has the right count but not the right cases.
		body = num(2)
		sut = TaggedUnionGet("o", [("some", num(1)), ("some", body)])
		self.assertFails("duplicate case: some", sut, {"o": OPTION}, guilty=body)
	
	def test_no_clauses_at_all(self):
		empty = TaggedUnionType([])
		sut = TaggedUnionGet("o", [])
		self.assertFails("switch has no clauses", sut, {"o": empty}, guilty=sut)
		self.assertFails("switch case is not exhaustive", sut, {"o": OPTION}, guilty=sut)
	
	def test_end_to_end_round_trip(self):
		unwrap = self._unwrap(("none", num(0)), ("some", ObjectGet(Var("o"), "value")))
		flipped = TaggedUnionType([("none", []), ("some", [("value", NUMBER)])])
		wrapped = TaggedUnionNew("some", [("value", num(7))], flipped)
		self.assertType(NUMBER, Const("unwrap", unwrap, Call(Var("unwrap"), [wrapped])))

class LocationTests(CheckerTestCase):
	
	def test_location_tags_pass_through(self):
		tag = object()
		sut = Add(num(), syntax.TrueLiteral(loc=tag))
		result = self.assertFails("number expected", sut)
		self.assertIs(tag, result.guilty.loc)

if __name__ == '__main__':
	unittest.main()
