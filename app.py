import logging
import os
from flask import Flask, jsonify
from flask_swagger_ui import get_swaggerui_blueprint
from dotenv import load_dotenv
from containers.chia.chia_test_ledger import ChiaTestLedger
from connectors.chia.plugin_factory_ledger_connector import create_plugin_factory
from connectors.chia.plugin_ledger_connector_chia import OPENAPI_PATH
from utils.error_logger import ErrorLogger
from routes.admin import admin_bp

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def _env_bool(name: str):
    value = os.getenv(name)
    if not value:
        return None
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

def _env_list(name: str):
    value = os.getenv(name)
    if value is None:
        return None
    return [item.strip() for item in value.split(',') if item.strip()] or None

def _env_float(name: str):
    value = os.getenv(name)
    return float(value) if value else None

app = Flask(__name__)

# Docker is only contacted once the ledger is started
chia_ledger = ChiaTestLedger(
    image_name=os.getenv('CHIA_LEDGER_IMAGE_NAME'),
    image_version=os.getenv('CHIA_LEDGER_IMAGE_VERSION'),
    env_vars=_env_list('CHIA_LEDGER_ENV_VARS'),
    emit_container_logs=_env_bool('CHIA_LEDGER_EMIT_LOGS'),
    log_level=os.getenv('CHIA_LEDGER_LOG_LEVEL'),
    health_check_timeout=_env_float('CHIA_LEDGER_HEALTH_CHECK_TIMEOUT')
)
connector = create_plugin_factory().create({
    'instance_id': os.getenv('CHIA_CONNECTOR_INSTANCE_ID', 'chia-connector-dev'),
    'log_level': os.getenv('CHIA_LEDGER_LOG_LEVEL', 'INFO')
})
error_logger = ErrorLogger("FlaskAPI")

# Swagger UI setup
SWAGGER_URL = '/swagger'
swaggerui_blueprint = get_swaggerui_blueprint(
    SWAGGER_URL,
    OPENAPI_PATH,
    config={
        'app_name': "Chia Test Ledger API"
    }
)
app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

# Register route blueprints
app.register_blueprint(admin_bp)
connector.register_web_services(app)
connector.on_plugin_init()

@app.route('/openapi.json')
def openapi_spec():
    return jsonify(connector.get_open_api_spec())


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', '5001')), debug=True)
