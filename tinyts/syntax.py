"""
The set of term-nodes in simple form.

Whatever reads a program (see front_end.py) calls these constructors bottom-up.
Each node carries an opaque location tag `loc`, which the type-checker never
inspects but passes along so that complaints can point at the right place.
"""
from typing import Any, NamedTuple, Sequence
from .calculus import TinyType, Param, FuncType

class Phrase:
	loc: Any
	def __init__(self, loc=None): self.loc = loc

class Term(Phrase):
	pass

class PropertyTerm(NamedTuple):
	name: str
	term: Term

class Clause(NamedTuple):
	tag_label: str
	term: Term

def _params(params) -> tuple[Param, ...]:
	return tuple(Param(name, typ) for name, typ in params)

class TrueLiteral(Term):
	def __repr__(self): return "true"

class FalseLiteral(Term):
	def __repr__(self): return "false"

class NumberLiteral(Term):
	def __init__(self, n, loc=None):
		super().__init__(loc)
		self.n = n
	def __repr__(self): return repr(self.n)

class If(Term):
	def __init__(self, cond:Term, thn:Term, els:Term, loc=None):
		super().__init__(loc)
		self.cond, self.thn, self.els = cond, thn, els

class Add(Term):
	def __init__(self, left:Term, right:Term, loc=None):
		super().__init__(loc)
		self.left, self.right = left, right

class Var(Term):
	def __init__(self, name:str, loc=None):
		super().__init__(loc)
		self.name = name
	def __repr__(self): return "<var:%s>"%self.name

class Func(Term):
	def __init__(self, params:Sequence, body:Term, loc=None):
		super().__init__(loc)
		self.params = _params(params)
		self.body = body

class Call(Term):
	def __init__(self, func:Term, args:Sequence[Term], loc=None):
		super().__init__(loc)
		self.func = func
		self.args = tuple(args)

class Seq(Term):
	def __init__(self, body:Term, rest:Term, loc=None):
		super().__init__(loc)
		self.body, self.rest = body, rest

class Const(Term):
	""" The binding scopes over `rest` and nothing else. """
	def __init__(self, name:str, init:Term, rest:Term, loc=None):
		super().__init__(loc)
		self.name, self.init, self.rest = name, init, rest

class RecFunc(Term):
	""" The function's own name is visible within its body and in `rest`. The parameters are not. """
	def __init__(self, func_name:str, params:Sequence, ret_type:TinyType, body:Term, rest:Term, loc=None):
		super().__init__(loc)
		self.func_name = func_name
		self.params = _params(params)
		self.ret_type = ret_type
		self.body, self.rest = body, rest
	
	def signature(self) -> FuncType:
		return FuncType(self.params, self.ret_type)

class ObjectNew(Term):
	def __init__(self, props:Sequence, loc=None):
		super().__init__(loc)
		self.props = tuple(PropertyTerm(name, term) for name, term in props)

class ObjectGet(Term):
	def __init__(self, obj:Term, prop_name:str, loc=None):
		super().__init__(loc)
		self.obj = obj
		self.prop_name = prop_name

class TaggedUnionNew(Term):
	def __init__(self, tag_label:str, props:Sequence, as_type:TinyType, loc=None):
		super().__init__(loc)
		self.tag_label = tag_label
		self.props = tuple(PropertyTerm(name, term) for name, term in props)
		self.as_type = as_type

class TaggedUnionGet(Term):
	def __init__(self, var_name:str, clauses:Sequence, loc=None):
		super().__init__(loc)
		self.var_name = var_name
		self.clauses = tuple(Clause(label, term) for label, term in clauses)
