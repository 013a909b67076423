#!/usr/bin/env python3
"""
Ledger connector plugin for Chia

Only stores its configuration and exposes a status web service for now;
ledger operations are not implemented yet.
"""
import logging
from typing import Any, Dict, Optional, Union

from flask import Blueprint, Flask
from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from containers.chia.options import resolve_log_level

logger = logging.getLogger(__name__)

PACKAGE_NAME = "@hyperledger/cactus-plugin-ledger-connector-chia"
PLUGIN_PATH = f"/api/v1/plugins/{PACKAGE_NAME}"
STATUS_PATH = f"{PLUGIN_PATH}/status"
OPENAPI_PATH = f"{PLUGIN_PATH}/openapi.json"


class PluginLedgerConnectorChiaOptions(BaseModel):
    """Configuration handed to the connector by its factory or caller."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    instance_id: StrictStr = Field(..., min_length=1)
    log_level: Union[int, str] = "INFO"
    plugin_registry: Optional[Any] = None

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value):
        resolve_log_level(value)
        return value


class PluginLedgerConnectorChia:
    CLASS_NAME = "PluginLedgerConnectorChia"

    def __init__(self, options: PluginLedgerConnectorChiaOptions):
        self.options = options
        self.log = logging.getLogger(f"{PACKAGE_NAME}/{options.instance_id}")
        self.log.setLevel(resolve_log_level(options.log_level))
        self._web_services: Optional[Blueprint] = None

    def get_instance_id(self) -> str:
        return self.options.instance_id

    def get_package_name(self) -> str:
        return PACKAGE_NAME

    def on_plugin_init(self) -> None:
        self.log.info(f"{self.CLASS_NAME} {self.get_instance_id()} initialized")

    def shutdown(self) -> None:
        self.log.info(f"{self.CLASS_NAME} {self.get_instance_id()} shut down")

    def get_status(self) -> Dict[str, Any]:
        return {
            "instanceId": self.get_instance_id(),
            "packageName": self.get_package_name(),
            "logLevel": logging.getLevelName(self.log.level),
            "hasPluginRegistry": self.options.plugin_registry is not None,
        }

    def get_open_api_spec(self) -> Dict[str, Any]:
        """OpenAPI document describing the web services of this plugin"""
        return {
            "openapi": "3.0.3",
            "info": {
                "title": "Hyperledger Cactus Plugin - Connector Chia",
                "description": "Can perform basic tasks on a Chia ledger",
                "version": "v2.0.0",
            },
            "paths": {
                STATUS_PATH: {
                    "get": {
                        "operationId": "getStatusV1",
                        "summary": "Status of the connector plugin instance",
                        "responses": {
                            "200": {
                                "description": "OK",
                                "content": {
                                    "application/json": {
                                        "schema": {"$ref": "#/components/schemas/ConnectorStatusV1"}
                                    }
                                },
                            }
                        },
                    }
                }
            },
            "components": {
                "schemas": {
                    "ConnectorStatusV1": {
                        "type": "object",
                        "required": ["instanceId", "packageName"],
                        "properties": {
                            "instanceId": {"type": "string"},
                            "packageName": {"type": "string"},
                            "logLevel": {"type": "string"},
                            "hasPluginRegistry": {"type": "boolean"},
                        },
                    }
                }
            },
        }

    def get_or_create_web_services(self) -> Blueprint:
        if self._web_services is None:
            from routes.chia_connector import create_connector_blueprint
            self._web_services = create_connector_blueprint(self)
        return self._web_services

    def register_web_services(self, app: Flask) -> Blueprint:
        blueprint = self.get_or_create_web_services()
        app.register_blueprint(blueprint)
        logger.info(f"Registered web services of {self.get_package_name()} ({self.get_instance_id()})")
        return blueprint
