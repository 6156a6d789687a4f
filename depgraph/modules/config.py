import configparser
import os

DEFAULT_LOCATIONS = [
    "/etc/depgraph/depgraph.conf",
    os.path.expanduser("~/.config/depgraph/depgraph.conf"),
]

ENV_VAR = "DEPGRAPH_CONF"


class DepgraphConfig:
    def __init__(self, locations=None, required=False):
        """
        locations: lista de arquivos candidatos, o primeiro existente vence.
        required: se True, falta de arquivo é erro (usado com --conf explícito).
        """
        if locations is None:
            env_path = os.environ.get(ENV_VAR)
            locations = ([env_path] if env_path else []) + DEFAULT_LOCATIONS
        self.locations = locations
        self.required = required
        self.config = configparser.ConfigParser()
        self.loaded_from = None
        self.reload()

    @classmethod
    def from_file(cls, path):
        return cls(locations=[path], required=True)

    def reload(self):
        """(Re)carrega a configuração do primeiro arquivo disponível."""
        self.config = configparser.ConfigParser()
        self.loaded_from = None
        for path in self.locations:
            if os.path.isfile(path):
                self.config.read(path)
                self.loaded_from = path
                return
        if self.required:
            raise FileNotFoundError(f"No configuration file found in: {self.locations}")

    def get(self, section, option, fallback=None):
        try:
            return self.config.get(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return fallback

    def getboolean(self, section, option, fallback=False):
        try:
            return self.config.getboolean(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback

    def getint(self, section, option, fallback=0):
        try:
            return self.config.getint(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError, ValueError):
            return fallback

    def __contains__(self, section):
        return section in self.config


# Instância global padrão para uso em outros módulos
config = DepgraphConfig()
