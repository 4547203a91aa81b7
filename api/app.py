# File: api/app.py
import os
import sys
import logging

# --- PATH SETUP (allows `python api/app.py` from a checkout) ---
current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.dirname(current_dir)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from flask import Flask, jsonify, abort, request
from pydantic import BaseModel, Field, ValidationError, field_validator
from waitress import serve

from config import settings
from api.auth import require_api_key
from core.calculations import ALGORITHM_VERSION, Api11CrudeInput, calculate_crude_api11_to_20
from core.coefficients import get_coefficients, get_commodity_options
from core.exceptions import ConvergenceError, InvalidInput
from core.provisional_fcv import calculate_provisional_fcv
from utils.helpers import setup_main_logging

# --- Logging and App Setup ---
setup_main_logging(settings.LOG_LEVEL)
logger = logging.getLogger("correction_api")
app = Flask(__name__)

PAYLOAD_HINT = "Send JSON { tempFluidoC, massaEspObs_gcc } with numeric values."


# --- Pydantic Models ---
class CalcApi11Payload(BaseModel):
    fluid_temperature_c: float = Field(alias="tempFluidoC")
    observed_density_gcc: float = Field(alias="massaEspObs_gcc")

    @field_validator('fluid_temperature_c', 'observed_density_gcc', mode='before')
    @classmethod
    def must_be_json_number(cls, v):
        # JSON true/false and numeric strings are not accepted as numbers
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        return v


def _parse_payload() -> CalcApi11Payload:
    body = request.get_json(silent=True) if request.is_json else None
    if not isinstance(body, dict):
        abort(400, description=PAYLOAD_HINT)
    try:
        return CalcApi11Payload(**body)
    except ValidationError as e:
        abort(400, description=e.errors(include_url=False, include_context=False, include_input=False))


# --- CORS ---
@app.after_request
def add_cors_headers(response):
    response.headers['Access-Control-Allow-Origin'] = settings.CORS_ALLOW_ORIGIN
    response.headers['Access-Control-Allow-Headers'] = "authorization, x-api-key, x-client-info, apikey, content-type"
    response.headers['Access-Control-Allow-Methods'] = "POST, OPTIONS"
    return response


# --- Error Handlers ---
@app.errorhandler(400)
def bad_request(e):
    description = getattr(e, 'description', str(e))
    if isinstance(description, str):
        return jsonify(ok=False, error=description), 400
    return jsonify(ok=False, error=PAYLOAD_HINT, details=description), 400

@app.errorhandler(401)
def unauthorized(e): return jsonify(ok=False, error="Unauthorized"), 401
@app.errorhandler(404)
def resource_not_found(e): return jsonify(ok=False, error="Resource not found"), 404
@app.errorhandler(405)
def method_not_allowed(e): return jsonify(ok=False, error="Use POST"), 405
@app.errorhandler(422)
def unprocessable(e): return jsonify(ok=False, error=getattr(e, 'description', str(e))), 422
@app.errorhandler(500)
def internal_server_error(e):
    logger.error(f"API Internal Server Error: {e}", exc_info=True)
    return jsonify(ok=False, error="Internal server error occurred."), 500


# --- API Endpoints ---
@app.route('/health', methods=['GET'])
def health_check():
    commodities = {key: get_coefficients(key).to_dict() for key in get_commodity_options()}
    return jsonify(status="ok", algorithmVersion=ALGORITHM_VERSION, commodities=commodities)

@app.route('/api/v1/calc-api11', methods=['POST'])
@require_api_key
def calc_api11():
    payload = _parse_payload()
    try:
        result = calculate_crude_api11_to_20(Api11CrudeInput(
            fluid_temperature_c=payload.fluid_temperature_c,
            observed_density_gcc=payload.observed_density_gcc,
        ))
    except InvalidInput as e:
        logger.warning(f"Rejected calc-api11 input: {e}")
        abort(400, description=str(e))
    except ConvergenceError as e:
        logger.warning(f"calc-api11 did not converge after {e.iterations} iterations for {payload.model_dump(by_alias=True)}")
        abort(422, description=str(e))
    except Exception as e:
        logger.error(f"Error during calc-api11 calculation: {e}", exc_info=True)
        abort(500)

    return jsonify(ok=True, algorithmVersion=ALGORITHM_VERSION, result=result.to_dict())

@app.route('/api/v1/fcv-provisional', methods=['POST'])
@require_api_key
def fcv_provisional():
    payload = _parse_payload()
    try:
        result = calculate_provisional_fcv(payload.fluid_temperature_c, payload.observed_density_gcc)
    except InvalidInput as e:
        logger.warning(f"Rejected fcv-provisional input: {e}")
        abort(400, description=str(e))

    return jsonify(ok=True, result=result.to_dict())


# --- Main Execution Block ---
if __name__ == '__main__':
    logger.info(f"Starting correction API with Waitress on http://0.0.0.0:{settings.FLASK_PORT}")
    serve(app, host='0.0.0.0', port=settings.FLASK_PORT, threads=settings.API_THREADS)
