# depgraph/modules/registry.py
"""
Registro de componentes.

Cada componente é identificado pelo nome; as arestas do grafo são guardadas
como conjuntos de nomes nos dois sentidos:

    A.dependencies  -> componentes que A exige
    A.dependents    -> componentes que exigem A

O registro é o único dono das instâncias de Component. Entradas nunca são
apagadas: um componente "removido" apenas volta a installed=False.
"""

from typing import Dict, Iterator, List, Optional, Set


class Component:
    """Unidade instalável com arestas para dependências e dependentes."""

    def __init__(self, name: str):
        self.name = name
        self.dependencies: Set[str] = set()
        self.dependents: Set[str] = set()
        self.installed = False

    def add_dependency(self, other: "Component"):
        """Cria a aresta self -> other e o espelho em other.dependents."""
        self.dependencies.add(other.name)
        other.dependents.add(self.name)

    def __eq__(self, other):
        if not isinstance(other, Component):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        state = "installed" if self.installed else "not installed"
        return f"<Component {self.name} ({state})>"


class ComponentRegistry:
    def __init__(self):
        self._components: Dict[str, Component] = {}

    def get_or_create(self, name: str) -> Component:
        """
        Retorna o componente existente ou cria um novo (installed=False).
        Nunca falha e nunca devolve dois objetos para o mesmo nome.
        """
        component = self._components.get(name)
        if component is None:
            component = Component(name)
            self._components[name] = component
        return component

    def lookup(self, name: str) -> Optional[Component]:
        return self._components.get(name)

    def all_names(self) -> List[str]:
        return sorted(self._components)

    def components(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __contains__(self, name):
        return name in self._components

    def __len__(self):
        return len(self._components)
