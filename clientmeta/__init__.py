from flask import Blueprint

# Blueprint for the client metadata endpoints (registered in main_app.create_app)
clientmeta_bp = Blueprint("clientmeta_bp", __name__)

# Import the routes to register them with the blueprint
from . import routes  # noqa: E402,F401
