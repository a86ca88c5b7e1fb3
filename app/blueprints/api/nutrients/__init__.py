"""
Nutrients API Module
====================

BioBizz dosing engine endpoints organized by concern:
- catalog.py: Products, phases, the weekly schedule, substrates, grow context
- dosage.py: Dosage calculation, live status, recommendations
- inventory.py: Bottle inventory, refills, shopping list
- logs.py: Dosing history and statistics
"""

from flask import Blueprint

from app.utils.http import error_response

# Create blueprint here to avoid circular imports
nutrients_api = Blueprint("nutrients_api", __name__)


# Error handlers
@nutrients_api.errorhandler(404)
def not_found(error):
    """Handle 404 errors"""
    return error_response("Resource not found", 404)


@nutrients_api.errorhandler(405)
def method_not_allowed(error):
    """Handle 405 errors"""
    return error_response("Method not allowed", 405)


@nutrients_api.errorhandler(500)
def internal_error(error):
    """Handle 500 errors"""
    return error_response("Internal server error", 500)


# Import submodules to register routes (must be after blueprint creation)
from . import catalog, dosage, inventory, logs  # noqa: E402

__all__ = ["nutrients_api"]
