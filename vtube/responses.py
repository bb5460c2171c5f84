from flask import jsonify, request

from vtube.errors import InvalidArgument


def api_response(status_code: int, data, message: str = "Success"):
    """Wrap a successful result in the JSON envelope shared by every endpoint."""
    return jsonify({
        "statusCode": status_code,
        "data": data,
        "message": message,
        "success": status_code < 400,
    }), status_code


def request_data() -> dict:
    """Return the JSON body, falling back to form fields."""
    if not request.is_json:
        return request.form.to_dict()

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidArgument("Request body must be a JSON object")
    return data
