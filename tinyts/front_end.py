"""
Read term trees in the JSON form an external parser emits.

Every node is an object with a "tag". Term tags are lower-case ("if", "call",
"objectNew", ...); type tags are capitalized ("Number", "Func", ...).
Field names are the parser's own, and each node may carry a "loc".

Problems go to the report, after which the reader gives up with Yuck.
"""
import json
from pathlib import Path
from typing import Optional
from . import syntax
from .calculus import TinyType, BOOLEAN, NUMBER, FuncType, ObjectType, TaggedUnionType
from .diagnostics import Report
from .location import span_of

class Yuck(Exception):
	""" Abandon reading; the argument says what phase gave up. """

class TreeReader:
	def __init__(self, report:Report, source_path:Optional[Path]=None):
		self._report = report
		self._source_path = source_path
		self._where = []
	
	def _bogus(self, hint:str):
		self._report.malformed_tree(self._source_path, "/".join(self._where) or "the top", hint)
		raise Yuck("read")
	
	def _field(self, node:dict, key:str):
		if key not in node: self._bogus("A %r node needs a %r field."%(node.get("tag"), key))
		return node[key]
	
	def _list(self, node:dict, key:str) -> list:
		them = self._field(node, key)
		if not isinstance(them, list): self._bogus("Field %r should be a list."%key)
		return them
	
	def _name(self, node:dict, key:str) -> str:
		it = self._field(node, key)
		if not isinstance(it, str): self._bogus("Field %r should be a name."%key)
		return it
	
	def _nested(self, key:str, reader, node):
		self._where.append(key)
		result = reader(node)
		self._where.pop()
		return result
	
	def _tag_of(self, node) -> str:
		if not isinstance(node, dict) or not isinstance(node.get("tag"), str):
			self._bogus("Expected a node with a tag, got %r."%(node,))
		return node["tag"]
	
	# Types:
	
	def read_type(self, node) -> TinyType:
		method = getattr(self, "type_"+self._tag_of(node), None)
		if method is None: self._bogus("Unknown type tag %r."%node["tag"])
		return method(node)
	
	@staticmethod
	def type_Boolean(_node): return BOOLEAN
	
	@staticmethod
	def type_Number(_node): return NUMBER
	
	def type_Func(self, node):
		params = self._params(node, "params", "type", self.read_type)
		return FuncType(params, self._nested("retType", self.read_type, self._field(node, "retType")))
	
	def type_Object(self, node):
		return ObjectType(self._params(node, "props", "type", self.read_type))
	
	def type_TaggedUnion(self, node):
		variants = []
		for i, v in enumerate(self._list(node, "variants")):
			self._where.append("variants[%d]"%i)
			label = self._name(v, "tagLabel")
			if label in (l for l, _ in variants): self._bogus("Variant %r appears twice."%label)
			variants.append((label, self._params(v, "props", "type", self.read_type)))
			self._where.pop()
		return TaggedUnionType(variants)
	
	def _params(self, node:dict, key:str, inner:str, reader) -> list:
		""" Lists of {name, <inner>} pairs, with names unique. """
		pairs = []
		for i, item in enumerate(self._list(node, key)):
			self._where.append("%s[%d]"%(key, i))
			name = self._name(item, "name")
			if name in (n for n, _ in pairs): self._bogus("The name %r appears twice."%name)
			pairs.append((name, self._nested(inner, reader, self._field(item, inner))))
			self._where.pop()
		return pairs
	
	# Terms:
	
	def read_term(self, node) -> syntax.Term:
		method = getattr(self, "term_"+self._tag_of(node), None)
		if method is None: self._bogus("Unknown term tag %r."%node["tag"])
		try: loc = span_of(node.get("loc"), self._source_path)
		except (KeyError, TypeError): self._bogus("Malformed location tag %r."%(node["loc"],))
		return method(node, loc)
	
	def _sub(self, node:dict, key:str) -> syntax.Term:
		return self._nested(key, self.read_term, self._field(node, key))
	
	@staticmethod
	def term_true(_node, loc): return syntax.TrueLiteral(loc)
	
	@staticmethod
	def term_false(_node, loc): return syntax.FalseLiteral(loc)
	
	def term_number(self, node, loc):
		n = self._field(node, "n")
		if isinstance(n, bool) or not isinstance(n, (int, float)): self._bogus("A number literal needs a number.")
		return syntax.NumberLiteral(n, loc)
	
	def term_if(self, node, loc):
		return syntax.If(self._sub(node, "cond"), self._sub(node, "thn"), self._sub(node, "els"), loc)
	
	def term_add(self, node, loc):
		return syntax.Add(self._sub(node, "left"), self._sub(node, "right"), loc)
	
	def term_var(self, node, loc):
		return syntax.Var(self._name(node, "name"), loc)
	
	def term_func(self, node, loc):
		params = self._params(node, "params", "type", self.read_type)
		return syntax.Func(params, self._sub(node, "body"), loc)
	
	def term_call(self, node, loc):
		func = self._sub(node, "func")
		args = [self._nested("args[%d]"%i, self.read_term, a) for i, a in enumerate(self._list(node, "args"))]
		return syntax.Call(func, args, loc)
	
	def term_seq(self, node, loc):
		return syntax.Seq(self._sub(node, "body"), self._sub(node, "rest"), loc)
	
	def term_const(self, node, loc):
		return syntax.Const(self._name(node, "name"), self._sub(node, "init"), self._sub(node, "rest"), loc)
	
	def term_recFunc(self, node, loc):
		name = self._name(node, "funcName")
		params = self._params(node, "params", "type", self.read_type)
		ret_type = self._nested("retType", self.read_type, self._field(node, "retType"))
		return syntax.RecFunc(name, params, ret_type, self._sub(node, "body"), self._sub(node, "rest"), loc)
	
	def _prop_terms(self, node) -> list:
		# Duplicates are the checker's business here, not the reader's.
		pairs = []
		for i, item in enumerate(self._list(node, "props")):
			self._where.append("props[%d]"%i)
			pairs.append((self._name(item, "name"), self._sub(item, "term")))
			self._where.pop()
		return pairs
	
	def term_objectNew(self, node, loc):
		return syntax.ObjectNew(self._prop_terms(node), loc)
	
	def term_objectGet(self, node, loc):
		return syntax.ObjectGet(self._sub(node, "obj"), self._name(node, "propName"), loc)
	
	def term_taggedUnionNew(self, node, loc):
		label = self._name(node, "tagLabel")
		props = self._prop_terms(node)
		as_type = self._nested("as", self.read_type, self._field(node, "as"))
		return syntax.TaggedUnionNew(label, props, as_type, loc)
	
	def term_taggedUnionGet(self, node, loc):
		clauses = []
		for i, item in enumerate(self._list(node, "clauses")):
			self._where.append("clauses[%d]"%i)
			clauses.append((self._name(item, "tagLabel"), self._sub(item, "term")))
			self._where.pop()
		return syntax.TaggedUnionGet(self._name(node, "varName"), clauses, loc)

def read_tree(data, report:Report, source_path:Optional[Path]=None) -> syntax.Term:
	""" From already-decoded JSON data """
	return TreeReader(report, source_path).read_term(data)

def read_file(path:Path, report:Report, source_path:Optional[Path]=None) -> syntax.Term:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			data = json.load(fh)
	except FileNotFoundError:
		report.no_such_file(path)
		raise Yuck("read")
	except (OSError, ValueError) as ex:
		report.broken_file(path, ex)
		raise Yuck("read")
	return read_tree(data, report, source_path)
