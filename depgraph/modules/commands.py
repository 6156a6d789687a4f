# depgraph/modules/commands.py
"""
Fronteira de entrada: transforma linhas de texto em comandos e aplica-os ao
DependencyManager, um de cada vez.

Formato (uma linha por comando, tokens separados por espaço):

    DEPEND  <componente> <dependência> [<dependência> ...]
    INSTALL <componente>
    REMOVE  <componente>
    LIST

Linhas vazias e comentários (#) são ignorados. Um comando inválido é
reportado e o processamento segue com a próxima linha.
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from depgraph.modules import logger
from depgraph.modules.manager import DependencyManager, DependencyManagerError, InvalidCommand

DEPEND = "DEPEND"
INSTALL = "INSTALL"
REMOVE = "REMOVE"
LIST = "LIST"

# keyword -> (mínimo de argumentos, máximo ou None)
ARITY = {
    DEPEND: (2, None),
    INSTALL: (1, 1),
    REMOVE: (1, 1),
    LIST: (0, 0),
}


@dataclass(frozen=True)
class Command:
    keyword: str
    args: Tuple[str, ...] = field(default_factory=tuple)
    line: str = ""


def parse_line(line: str) -> Optional[Command]:
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    tokens = stripped.split()
    keyword = tokens[0].upper()
    args = tuple(tokens[1:])
    if keyword not in ARITY:
        raise InvalidCommand(f"Unknown command: {tokens[0]}")

    minimum, maximum = ARITY[keyword]
    if len(args) < minimum or (maximum is not None and len(args) > maximum):
        if maximum is None:
            expected = f"at least {minimum}"
        else:
            expected = str(minimum)
        raise InvalidCommand(f"{keyword} expects {expected} argument(s), got {len(args)}")
    return Command(keyword, args, stripped)


class CommandRunner:
    def __init__(self,
                 manager: DependencyManager,
                 echo: Optional[Callable[[str], None]] = None,
                 log: Optional[logger.Logger] = None):
        """
        manager: alvo dos comandos.
        echo: recebe cada linha de comando antes da execução (None = sem eco).
        """
        self.manager = manager
        self.echo = echo
        self.log = log or logger.Logger("commands")

    def execute(self, command: Command):
        keyword, args = command.keyword, command.args
        if keyword == DEPEND:
            self.manager.declare_dependency(args[0], args[1:])
        elif keyword == INSTALL:
            self.manager.install(args[0], True)
        elif keyword == REMOVE:
            self.manager.remove(args[0])
        elif keyword == LIST:
            self.manager.list()
        else:
            raise InvalidCommand(f"Unknown command: {keyword}")
        self.log.info(command.line or " ".join((keyword,) + args), to_history=True)

    def run_lines(self, lines: Iterable[str]) -> int:
        """Aplica todas as linhas; retorna quantos comandos foram rejeitados."""
        rejected = 0
        for lineno, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            if self.echo:
                self.echo(line)
            try:
                command = parse_line(line)
                if command is not None:
                    self.execute(command)
            except DependencyManagerError as e:
                rejected += 1
                self.manager.emit(f"error: {e}")
                self.log.warning(f"line {lineno}: {e}")
        return rejected

    def run(self, commands: Iterable[Command]) -> List[Command]:
        """Aplica comandos já analisados; retorna os que foram rejeitados."""
        failed = []
        for command in commands:
            try:
                self.execute(command)
            except DependencyManagerError as e:
                failed.append(command)
                self.manager.emit(f"error: {e}")
                self.log.warning(str(e))
        return failed
