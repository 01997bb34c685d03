from flashlearn_app.core.error_handlers import success_response
from flashlearn_app.utils.time_utils import utcnow
from . import main_bp


@main_bp.route('/health', methods=['GET'])
def health():
    """Liveness probe."""
    return success_response({'timestamp': utcnow().isoformat()}, message='FlashLearn API is running')
