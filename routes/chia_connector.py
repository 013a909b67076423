import logging
from flask import Blueprint, jsonify

from connectors.chia.plugin_ledger_connector_chia import OPENAPI_PATH, STATUS_PATH

logger = logging.getLogger(__name__)

def create_connector_blueprint(plugin):
    """Web services of one connector plugin instance"""
    connector_bp = Blueprint(f'chia_connector_{plugin.get_instance_id().replace(".", "_")}', __name__)

    @connector_bp.route(STATUS_PATH, methods=['GET'])
    def get_connector_status():
        logger.debug(f"Status requested for connector {plugin.get_instance_id()}")
        return jsonify(plugin.get_status()), 200

    @connector_bp.route(OPENAPI_PATH, methods=['GET'])
    def get_connector_openapi():
        return jsonify(plugin.get_open_api_spec()), 200

    return connector_bp
