import pytest

from depgraph.modules.config import DepgraphConfig
from depgraph.modules.logger import Logger
from depgraph.modules.manager import DependencyManager


@pytest.fixture
def conf():
    return DepgraphConfig(locations=[])


@pytest.fixture
def output():
    return []


@pytest.fixture
def manager(conf, output):
    return DependencyManager(emit=output.append, log=Logger("test", conf=conf))
