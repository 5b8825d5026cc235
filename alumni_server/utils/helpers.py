from flask import jsonify, current_app, request


def respond_error(message_or_dict, status=400):
    """Return a standardized error response."""
    if isinstance(message_or_dict, dict):
        body = {'success': False, 'errors': message_or_dict}
    else:
        body = {'success': False, 'error': message_or_dict}
    return jsonify(body), status


def respond_success(payload=None, status=200):
    if payload is None:
        payload = {}
    body = {'success': True}
    if isinstance(payload, dict):
        body.update(payload)
    else:
        body['data'] = payload
    return jsonify(body), status


def get_service(name):
    """Look up a service wired into the current app by create_app()."""
    return current_app.extensions['alumni_services'][name]


def get_request_data(req=None):
    """JSON body when present, otherwise form fields; multipart requests carry uploads beside form data."""
    if req is None:
        req = request
    data = req.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return req.form.to_dict()
