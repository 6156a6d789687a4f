# depgraph/modules/manager.py
"""
DependencyManager: construção do grafo e algoritmos de install/remove/list.

- declare_dependency: adiciona arestas (cumulativo, nunca remove).
- install: instala o fechamento de dependências em pós-ordem.
- remove: remove um componente e varre as dependências que ficaram órfãs.
- list: reporta os componentes instalados (ordenados por nome).

Toda saída visível é enviada para `emit` (uma linha por chamada). Os
algoritmos usam pilhas explícitas em vez de recursão, preservando a mesma
ordem de visita em profundidade.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence

from depgraph.modules import logger
from depgraph.modules.registry import Component, ComponentRegistry


class DependencyManagerError(Exception):
    pass


class UnknownComponent(DependencyManagerError):
    def __init__(self, name: str):
        super().__init__(f"Unknown component: {name}")
        self.name = name


class InvalidCommand(DependencyManagerError):
    pass


class CyclicDependency(DependencyManagerError):
    def __init__(self, cycle: Sequence[str]):
        super().__init__("Cyclic dependency: " + " -> ".join(cycle))
        self.cycle = list(cycle)


@dataclass(frozen=True)
class ComponentInfo:
    name: str
    installed: bool
    dependencies: List[str]
    dependents: List[str]


class DependencyManager:
    def __init__(self,
                 registry: Optional[ComponentRegistry] = None,
                 emit: Optional[Callable[[str], None]] = None,
                 log: Optional[logger.Logger] = None):
        """
        registry: armazenamento dos componentes (um novo se omitido).
        emit: destino das notificações; por padrão descarta as linhas.
        """
        self.registry = registry if registry is not None else ComponentRegistry()
        self.emit = emit or (lambda line: None)
        self.log = log or logger.Logger("manager")

    # -------------------------
    # Graph construction
    # -------------------------
    def declare_dependency(self, component_name: str, dependency_names: Iterable[str]):
        _require_name(component_name, "DEPEND")
        dependency_names = list(dependency_names)
        for name in dependency_names:
            _require_name(name, "DEPEND")

        component = self.registry.get_or_create(component_name)
        for name in dependency_names:
            component.add_dependency(self.registry.get_or_create(name))
        self.log.debug(f"{component_name} depends on {sorted(component.dependencies)}")

    # -------------------------
    # Install
    # -------------------------
    def install(self, component_name: str, notify_if_installed: bool = True):
        _require_name(component_name, "INSTALL")
        component = self.registry.get_or_create(component_name)
        if component.installed:
            if notify_if_installed:
                self.emit(f"{component.name} is already installed")
            return

        # plano completo antes de mudar estado: um ciclo não deixa nada pela metade
        for item in self._install_order(component):
            self.emit(f"Installing {item.name}")
            item.installed = True
            self.log.info(f"installed {item.name}")

    def _install_order(self, root: Component) -> List[Component]:
        """Pós-ordem das dependências ainda não instaladas, terminando em root."""
        order: List[Component] = []
        planned = set()
        path = [root]
        on_path = {root.name}
        stack = [iter(self._dependencies_of(root))]

        while stack:
            dep = next(stack[-1], None)
            if dep is None:
                stack.pop()
                done = path.pop()
                on_path.discard(done.name)
                planned.add(done.name)
                order.append(done)
                continue
            if dep.installed or dep.name in planned:
                continue
            if dep.name in on_path:
                names = [c.name for c in path]
                raise CyclicDependency(names[names.index(dep.name):] + [dep.name])
            path.append(dep)
            on_path.add(dep.name)
            stack.append(iter(self._dependencies_of(dep)))

        return order

    # -------------------------
    # Remove
    # -------------------------
    def remove(self, component_name: str):
        _require_name(component_name, "REMOVE")
        component = self.registry.lookup(component_name)
        if component is None:
            raise UnknownComponent(component_name)

        if not component.installed:
            self.emit(f"{component.name} is not installed.")
            return
        if self._has_installed_dependent(component):
            self.emit(f"{component.name} is still needed.")
            return

        self._uninstall(component)
        self._sweep_orphans(component)

    def _sweep_orphans(self, removed: Component):
        # cada órfão removido tem as próprias dependências varridas antes do próximo irmão
        stack = [iter(self._dependencies_of(removed))]
        while stack:
            candidate = next(stack[-1], None)
            if candidate is None:
                stack.pop()
                continue
            if candidate.installed and not self._has_installed_dependent(candidate):
                self._uninstall(candidate)
                stack.append(iter(self._dependencies_of(candidate)))

    def _uninstall(self, component: Component):
        self.emit(f"Removing {component.name}")
        component.installed = False
        self.log.info(f"removed {component.name}")

    # -------------------------
    # Queries
    # -------------------------
    def list(self):
        for name in self.installed():
            self.emit(name)

    def installed(self) -> List[str]:
        return sorted(c.name for c in self.registry.components() if c.installed)

    def describe(self, component_name: str) -> ComponentInfo:
        component = self.registry.lookup(component_name)
        if component is None:
            raise UnknownComponent(component_name)
        return ComponentInfo(
            name=component.name,
            installed=component.installed,
            dependencies=sorted(component.dependencies),
            dependents=sorted(component.dependents),
        )

    # -------------------------
    # Helpers
    # -------------------------
    def _dependencies_of(self, component: Component) -> List[Component]:
        return [self.registry.lookup(name) for name in sorted(component.dependencies)]

    def _has_installed_dependent(self, component: Component) -> bool:
        return any(self.registry.lookup(name).installed for name in component.dependents)


def _require_name(name, keyword):
    if not name or not name.strip():
        raise InvalidCommand(f"{keyword}: component name must not be empty")
