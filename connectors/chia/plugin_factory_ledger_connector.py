#!/usr/bin/env python3
"""
Factory creating Chia connector plugin instances
"""
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from connectors.chia.plugin_ledger_connector_chia import (
    PluginLedgerConnectorChia,
    PluginLedgerConnectorChiaOptions,
)


class PluginImportType(str, Enum):
    LOCAL = "LOCAL"
    REMOTE = "REMOTE"


class PluginFactoryOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    plugin_import_type: PluginImportType = PluginImportType.LOCAL


class PluginFactoryLedgerConnector:
    def __init__(self, options: Optional[PluginFactoryOptions] = None):
        self.options = options or PluginFactoryOptions()

    def create(self, plugin_options: Union[PluginLedgerConnectorChiaOptions, Dict[str, Any]]) -> PluginLedgerConnectorChia:
        if isinstance(plugin_options, dict):
            plugin_options = PluginLedgerConnectorChiaOptions(**plugin_options)
        return PluginLedgerConnectorChia(plugin_options)


def create_plugin_factory(options: Optional[PluginFactoryOptions] = None) -> PluginFactoryLedgerConnector:
    return PluginFactoryLedgerConnector(options)
