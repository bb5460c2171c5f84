from flask import Blueprint

import vtube
from vtube.responses import api_response

healthcheck_bp = Blueprint('healthcheck', __name__, url_prefix='/api/v1/healthcheck')


@healthcheck_bp.route('/')
def healthcheck():
    return api_response(200, {"status": "OK", "version": vtube.__version__}, "Service is healthy")
