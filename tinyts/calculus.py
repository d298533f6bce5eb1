"""
The data over which the type-checker operates.

Types here are plain value objects. Identity means nothing;
two types are the same type when the equality judgment says so.
(See equality.py for that judgment.)

The checker's failures also live here, as the Error judgment.
That way every checking call returns a TinyType, and failures
travel outward by early return rather than by exception.
"""
from typing import Iterable, NamedTuple, Optional, Sequence

class TinyType:
	def visit(self, visitor:"TypeVisitor"): raise NotImplementedError(type(self))
	def is_error(self): return False
	def __repr__(self) -> str:
		it = self.visit(Render())
		assert isinstance(it, str), (it, type(self))
		return it

class Param(NamedTuple):
	""" Serves for function parameters and for object/variant properties alike. """
	name: str
	type: TinyType

def _params(items:Iterable) -> tuple[Param, ...]:
	them = tuple(Param(name, typ) for name, typ in items)
	names = [p.name for p in them]
	assert len(set(names)) == len(names), names
	assert all(isinstance(p.type, TinyType) for p in them), them
	return them

def _lookup(params:Sequence[Param], name:str) -> Optional[TinyType]:
	for p in params:
		if p.name == name: return p.type

class BooleanType(TinyType):
	def visit(self, visitor:"TypeVisitor"): return visitor.on_boolean(self)

class NumberType(TinyType):
	def visit(self, visitor:"TypeVisitor"): return visitor.on_number(self)

class FuncType(TinyType):
	def __init__(self, params:Iterable, ret_type:TinyType):
		assert isinstance(ret_type, TinyType), ret_type
		self.params = _params(params)
		self.ret_type = ret_type
	def visit(self, visitor:"TypeVisitor"): return visitor.on_func(self)
	def arity(self) -> int: return len(self.params)

class ObjectType(TinyType):
	def __init__(self, props:Iterable):
		self.props = _params(props)
	def visit(self, visitor:"TypeVisitor"): return visitor.on_object(self)
	def prop(self, name:str) -> Optional[TinyType]:
		return _lookup(self.props, name)

class Variant(NamedTuple):
	tag_label: str
	props: tuple[Param, ...]
	
	def prop(self, name:str) -> Optional[TinyType]:
		return _lookup(self.props, name)
	def as_object(self) -> ObjectType:
		# Within a match-clause, the subject looks like a plain object.
		return ObjectType(self.props)

class TaggedUnionType(TinyType):
	def __init__(self, variants:Iterable):
		self.variants = tuple(Variant(label, _params(props)) for label, props in variants)
		labels = [v.tag_label for v in self.variants]
		assert len(set(labels)) == len(labels), labels
	def visit(self, visitor:"TypeVisitor"): return visitor.on_tagged_union(self)
	def variant(self, tag_label:str) -> Optional[Variant]:
		for v in self.variants:
			if v.tag_label == tag_label: return v

class Error(TinyType):
	""" The judgment of things that do not type-check. """
	def __init__(self, nature:str, guilty):
		self.nature = nature
		self.guilty = guilty
	def visit(self, visitor:"TypeVisitor"): return visitor.on_error(self)
	def is_error(self): return True

BOOLEAN = BooleanType()
NUMBER = NumberType()

###################
#

class TypeVisitor:
	def on_boolean(self, b:BooleanType): raise NotImplementedError(type(self))
	def on_number(self, n:NumberType): raise NotImplementedError(type(self))
	def on_func(self, f:FuncType): raise NotImplementedError(type(self))
	def on_object(self, o:ObjectType): raise NotImplementedError(type(self))
	def on_tagged_union(self, u:TaggedUnionType): raise NotImplementedError(type(self))
	def on_error(self, e:Error): raise NotImplementedError(type(self))


class Render(TypeVisitor):
	""" Return a string representation of the type, in the surface syntax. """
	def on_boolean(self, b: BooleanType):
		return "boolean"
	def on_number(self, n: NumberType):
		return "number"
	def _params(self, params:Sequence[Param], sep:str):
		return sep.join("%s: %s"%(p.name, p.type.visit(self)) for p in params)
	def on_func(self, f: FuncType):
		return "(%s) => %s"%(self._params(f.params, ", "), f.ret_type.visit(self))
	def on_object(self, o: ObjectType):
		if o.props: return "{ %s }"%self._params(o.props, "; ")
		else: return "{}"
	def on_tagged_union(self, u: TaggedUnionType):
		def case(v:Variant):
			tag = 'tag: "%s"'%v.tag_label
			return "{ %s }"%"; ".join([tag, self._params(v.props, "; ")] if v.props else [tag])
		return " | ".join(map(case, u.variants)) or "never"
	def on_error(self, e: Error):
		return "-/error: %s/-"%e.nature
