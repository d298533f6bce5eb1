"""
Structural type equality.

The judgment dispatches on the shape of the *expected* type, and the actual
type rides along as an argument. Each shape has its own rule, so each rule
can be read (and changed) without thinking about the others.

Nothing here ever fails: The answer is always yes or no.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from .calculus import (
	TinyType, Param,
	BooleanType, NumberType, FuncType, ObjectType, TaggedUnionType, Error,
)

class Equality(Visitor):
	
	@staticmethod
	def visit_BooleanType(_expected:BooleanType, actual:TinyType) -> bool:
		return isinstance(actual, BooleanType)
	
	@staticmethod
	def visit_NumberType(_expected:NumberType, actual:TinyType) -> bool:
		return isinstance(actual, NumberType)
	
	@staticmethod
	def visit_FuncType(expected:FuncType, actual:TinyType) -> bool:
		if not isinstance(actual, FuncType): return False
		if actual.arity() != expected.arity(): return False
		# Parameters compare in the same direction as the whole. No contravariance here.
		for a, e in zip(actual.params, expected.params):
			if not type_eq(a.type, e.type): return False
		return type_eq(actual.ret_type, expected.ret_type)
	
	@staticmethod
	def visit_ObjectType(expected:ObjectType, actual:TinyType) -> bool:
		if not isinstance(actual, ObjectType): return False
		return _same_props(actual.props, expected.props)
	
	@staticmethod
	def visit_TaggedUnionType(expected:TaggedUnionType, actual:TinyType) -> bool:
		if not isinstance(actual, TaggedUnionType): return False
		if len(actual.variants) != len(expected.variants): return False
		for e in expected.variants:
			a = actual.variant(e.tag_label)
			if a is None or not _same_props(a.props, e.props): return False
		return True
	
	@staticmethod
	def visit_Error(_expected:Error, _actual:TinyType) -> bool:
		return False

def _same_props(actual:Sequence[Param], expected:Sequence[Param]) -> bool:
	"""
	Equal length, plus every expected property finds its namesake in the actual,
	amounts to a permutation. Order does not matter; width does.
	"""
	if len(actual) != len(expected): return False
	lookup = dict(actual)
	for name, typ in expected:
		if name not in lookup or not type_eq(lookup[name], typ): return False
	return True

_EQUALITY = Equality()

def type_eq(actual:TinyType, expected:TinyType) -> bool:
	return _EQUALITY.visit(expected, actual)
