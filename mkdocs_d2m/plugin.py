"""
MkDocs plugin hosting the Doxygen XML ingestion.

On ``on_config`` the configured XML directory is read into a Registry,
which stays available as ``plugin.registry`` for the pages that render it.
Any ingestion failure aborts the build; there is no partial registry.
"""

from __future__ import annotations

import logging
import os

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.exceptions import PluginError
from mkdocs.plugins import BasePlugin

from .errors import DoxygenError
from .parser import INDEX_FILE, parse_xml

log = logging.getLogger("mkdocs.plugins.d2m")


class D2mConfig(MkDocsConfig):
    xml_dir = config_options.Type(str, default="")
    index_file = config_options.Type(str, default=INDEX_FILE)


def _resolve_dir(path, config_dir):
    if not os.path.isabs(path):
        path = os.path.normpath(os.path.join(config_dir, path))
    return path


class D2mPlugin(BasePlugin[D2mConfig]):

    def __init__(self):
        super().__init__()
        self.registry = None

    def on_config(self, config, **kwargs):
        config_dir = os.path.dirname(config.get("config_file_path", "") or "") or os.getcwd()
        self.registry = None

        xml_dir = self.config["xml_dir"]
        if not xml_dir:
            log.warning("d2m: no xml_dir configured, skipping Doxygen ingestion")
            return config

        xml_dir = _resolve_dir(xml_dir, config_dir)
        if not os.path.isdir(xml_dir):
            log.error("d2m: xml_dir does not exist: %s", xml_dir)
            raise PluginError(f"d2m: xml_dir does not exist: {xml_dir}")

        try:
            self.registry = parse_xml(xml_dir, self.config["index_file"])
        except (DoxygenError, OSError) as exc:
            log.error("d2m: ingestion of %s failed: %s", xml_dir, exc)
            raise PluginError(f"d2m: {exc}") from exc

        return config
