"""
Simplest possible environment concept.

This is the canonical list-structured search. Extending an environment
makes a new inner layer atop the old one; nobody ever writes into a layer
after it is made. So sibling branches cannot see each other's bindings,
and a binding vanishes when the layer holding it goes out of use.
"""
from typing import Iterable, Mapping, Optional, Union
import abc
from .calculus import TinyType

class Absent(KeyError): pass

class Environment(abc.ABC):
	@abc.abstractmethod
	def resolve(self, name:str) -> TinyType:
		""" Raise Absent if the name is not bound. """
	
	def __contains__(self, name:str) -> bool:
		try: self.resolve(name)
		except Absent: return False
		else: return True
	
	def extend(self, pairs:Iterable[tuple[str, TinyType]]) -> "Environment":
		return InnerEnv(dict(pairs), self)
	
	def bind(self, name:str, typ:TinyType) -> "Environment":
		return InnerEnv({name: typ}, self)

class NullEnv(Environment):
	""" Effectively the built-in scope, but with nothing built in. """
	def resolve(self, name:str) -> TinyType:
		raise Absent(name)

null_env = NullEnv()

class InnerEnv(Environment):
	def __init__(self, bindings:dict[str, TinyType], static_link:Environment):
		assert all(isinstance(t, TinyType) for t in bindings.values()), bindings
		self._bindings = bindings
		self._static_link = static_link
	
	def resolve(self, name:str) -> TinyType:
		if name in self._bindings: return self._bindings[name]
		else: return self._static_link.resolve(name)

def as_environment(env:Optional[Union[Environment, Mapping[str, TinyType]]]) -> Environment:
	if env is None: return null_env
	if isinstance(env, Environment): return env
	# The caller's mapping is copied, never retained.
	return null_env.extend(env.items())
