"""
The type-checking judgment.

Walk a term, threading an immutable type-environment, and produce either the
term's type or an Error judgment. There is one rule per kind of term.
Whenever two types must agree, the rule consults equality.type_eq.

Failures do not throw. Each rule returns the first Error it meets, at once,
so the first violation in left-to-right order is the one that gets reported.
"""
from typing import Optional
from boozetools.support.foundation import Visitor
from . import syntax
from .calculus import (
	TinyType, Error, BOOLEAN, NUMBER,
	BooleanType, NumberType, FuncType, ObjectType, TaggedUnionType,
)
from .equality import type_eq
from .environment import Environment, Absent, as_environment
from .diagnostics import Report

class TypeChecker(Visitor):
	
	def __init__(self, report:Optional[Report]=None):
		self._report = report
	
	def check(self, term:syntax.Term, env:Environment) -> TinyType:
		typ = self.visit(term, env)
		assert isinstance(typ, TinyType), (typ, type(term))
		return typ
	
	def check_program(self, term:syntax.Term, env=None) -> TinyType:
		""" As `check`, but also tells the report how things went. """
		report = self._report
		if report: report.info("Type-Check", type(term).__name__)
		result = self.check(term, as_environment(env))
		if report:
			if result.is_error(): report.type_error(result)
			else: report.info("Judged", result)
		return result
	
	@staticmethod
	def visit_TrueLiteral(_t:syntax.TrueLiteral, _env) -> TinyType:
		return BOOLEAN
	
	@staticmethod
	def visit_FalseLiteral(_t:syntax.FalseLiteral, _env) -> TinyType:
		return BOOLEAN
	
	@staticmethod
	def visit_NumberLiteral(_t:syntax.NumberLiteral, _env) -> TinyType:
		return NUMBER
	
	def visit_If(self, t:syntax.If, env:Environment) -> TinyType:
		cond_type = self.check(t.cond, env)
		if cond_type.is_error(): return cond_type
		if not isinstance(cond_type, BooleanType): return Error("boolean type expected", t.cond)
		thn_type = self.check(t.thn, env)
		if thn_type.is_error(): return thn_type
		els_type = self.check(t.els, env)
		if els_type.is_error(): return els_type
		if not type_eq(thn_type, els_type): return Error("then and else have different types", t)
		return thn_type
	
	def visit_Add(self, t:syntax.Add, env:Environment) -> TinyType:
		for operand in t.left, t.right:
			typ = self.check(operand, env)
			if typ.is_error(): return typ
			if not isinstance(typ, NumberType): return Error("number expected", operand)
		return NUMBER
	
	@staticmethod
	def visit_Var(t:syntax.Var, env:Environment) -> TinyType:
		try: return env.resolve(t.name)
		except Absent: return Error("unknown variable: %s"%t.name, t)
	
	def visit_Func(self, t:syntax.Func, env:Environment) -> TinyType:
		ret_type = self.check(t.body, env.extend(t.params))
		if ret_type.is_error(): return ret_type
		return FuncType(t.params, ret_type)
	
	def visit_RecFunc(self, t:syntax.RecFunc, env:Environment) -> TinyType:
		# The signature is all there is to go on while checking the body.
		func_type = t.signature()
		inner = env.extend(t.params).bind(t.func_name, func_type)
		ret_type = self.check(t.body, inner)
		if ret_type.is_error(): return ret_type
		if not type_eq(ret_type, t.ret_type): return Error("wrong return type", t)
		return self.check(t.rest, env.bind(t.func_name, func_type))
	
	def visit_Call(self, t:syntax.Call, env:Environment) -> TinyType:
		func_type = self.check(t.func, env)
		if func_type.is_error(): return func_type
		if not isinstance(func_type, FuncType): return Error("function type expected", t.func)
		if func_type.arity() != len(t.args): return Error("wrong number of arguments", t)
		for arg, param in zip(t.args, func_type.params):
			arg_type = self.check(arg, env)
			if arg_type.is_error(): return arg_type
			if not type_eq(arg_type, param.type): return Error("parameter type mismatch", arg)
		return func_type.ret_type
	
	def visit_Seq(self, t:syntax.Seq, env:Environment) -> TinyType:
		body_type = self.check(t.body, env)
		if body_type.is_error(): return body_type
		return self.check(t.rest, env)
	
	def visit_Const(self, t:syntax.Const, env:Environment) -> TinyType:
		init_type = self.check(t.init, env)
		if init_type.is_error(): return init_type
		return self.check(t.rest, env.bind(t.name, init_type))
	
	def visit_ObjectNew(self, t:syntax.ObjectNew, env:Environment) -> TinyType:
		props = {}
		for name, term in t.props:
			if name in props: return Error("duplicate property name: %s"%name, t)
			typ = self.check(term, env)
			if typ.is_error(): return typ
			props[name] = typ
		return ObjectType(props.items())
	
	def visit_ObjectGet(self, t:syntax.ObjectGet, env:Environment) -> TinyType:
		obj_type = self.check(t.obj, env)
		if obj_type.is_error(): return obj_type
		if not isinstance(obj_type, ObjectType): return Error("object type expected", t.obj)
		prop_type = obj_type.prop(t.prop_name)
		if prop_type is None: return Error("unknown property name: %s"%t.prop_name, t)
		return prop_type
	
	def visit_TaggedUnionNew(self, t:syntax.TaggedUnionNew, env:Environment) -> TinyType:
		as_type = t.as_type
		if not isinstance(as_type, TaggedUnionType): return Error('"as" must have a tagged union type', t)
		variant = as_type.variant(t.tag_label)
		if variant is None: return Error("unknown variant label: %s"%t.tag_label, t)
		supplied = set()
		for name, term in t.props:
			if name in supplied: return Error("duplicate property name: %s"%name, t)
			supplied.add(name)
			declared = variant.prop(name)
			if declared is None: return Error("unknown property name: %s"%name, t)
			actual = self.check(term, env)
			if actual.is_error(): return actual
			if not type_eq(actual, declared): return Error("property type mismatch for property: %s"%name, t)
		for name, _ in variant.props:
			if name not in supplied: return Error("missing property name: %s"%name, t)
		return as_type
	
	def visit_TaggedUnionGet(self, t:syntax.TaggedUnionGet, env:Environment) -> TinyType:
		try: subject_type = env.resolve(t.var_name)
		except Absent: return Error("unknown variable: %s"%t.var_name, t)
		if not isinstance(subject_type, TaggedUnionType):
			return Error("variable %s must have a tagged union type"%t.var_name, t)
		result = None
		seen = set()
		for clause in t.clauses:
			variant = subject_type.variant(clause.tag_label)
			if variant is None: return Error("tagged union has no case: %s"%clause.tag_label, clause.term)
			if clause.tag_label in seen: return Error("duplicate case: %s"%clause.tag_label, clause.term)
			seen.add(clause.tag_label)
			# Within the clause, the subject is known to be that one variant.
			clause_type = self.check(clause.term, env.bind(t.var_name, variant.as_object()))
			if clause_type.is_error(): return clause_type
			if result is None: result = clause_type
			elif not type_eq(clause_type, result): return Error("clauses has different type", clause.term)
		# Known, distinct labels and equal counts: Every variant is covered.
		if len(t.clauses) != len(subject_type.variants): return Error("switch case is not exhaustive", t)
		if result is None: return Error("switch has no clauses", t)
		return result

def typecheck(term:syntax.Term, env=None) -> TinyType:
	"""
	Judge the type of a term in an (optional) initial environment,
	which may be an Environment or else a mapping from names to types.
	The answer is either a type or an Error; check with `is_error()`.
	"""
	return TypeChecker().check(term, as_environment(env))
