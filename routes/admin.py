import logging
from flask import Blueprint, jsonify

from docker.errors import DockerException

from containers.errors import ChiaTestLedgerError, NotStartedError

logger = logging.getLogger(__name__)
admin_bp = Blueprint('admin', __name__)

def _ledger_error_response(action: str, e: Exception):
    from app import error_logger

    status_code = 409 if isinstance(e, NotStartedError) else 500
    error_data = error_logger.log_error(f"ledger_{action}_failed", f"Failed to {action} test ledger", {}, e)
    return jsonify({'error': f'Failed to {action} test ledger: {str(e)}', 'details': error_data}), status_code

@admin_bp.route('/admin/server/health', methods=['GET'])
def admin_health():
    return jsonify({'status': 'healthy'}), 200

@admin_bp.route('/admin/server/ledger/start', methods=['POST'])
def admin_ledger_start():
    from app import chia_ledger

    try:
        chia_ledger.start()
        return jsonify({
            'success': True,
            'message': 'Test ledger started and healthy',
            'container_id': chia_ledger.get_container_id(),
            'image': chia_ledger.get_container_image_name()
        }), 200
    except (ChiaTestLedgerError, DockerException) as e:
        return _ledger_error_response('start', e)

@admin_bp.route('/admin/server/ledger/stop', methods=['POST'])
def admin_ledger_stop():
    from app import chia_ledger

    try:
        chia_ledger.stop()
        return jsonify({'success': True, 'message': 'Test ledger stopped'}), 200
    except (ChiaTestLedgerError, DockerException) as e:
        return _ledger_error_response('stop', e)

@admin_bp.route('/admin/server/ledger/destroy', methods=['POST'])
def admin_ledger_destroy():
    from app import chia_ledger

    try:
        chia_ledger.destroy()
        return jsonify({'success': True, 'message': 'Test ledger container removed'}), 200
    except (ChiaTestLedgerError, DockerException) as e:
        return _ledger_error_response('destroy', e)

@admin_bp.route('/admin/server/ledger/status', methods=['GET'])
def admin_ledger_status():
    from app import chia_ledger

    status = {
        'state': chia_ledger.state.name,
        'image': chia_ledger.get_container_image_name(),
        'container_id': None,
        'ip_address': None
    }
    try:
        status['container_id'] = chia_ledger.get_container_id()
    except NotStartedError:
        return jsonify(status), 200

    try:
        status['ip_address'] = chia_ledger.get_container_ip_address()
    except (ChiaTestLedgerError, DockerException) as e:
        logger.warning(f"Could not resolve test ledger IP address: {e}")
    return jsonify(status), 200
