"""
Request helpers shared by the blueprints
"""
from flask import request


def request_data():
    """Body of the request, whether it was sent as JSON or as a form"""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def form_list(name):
    """Repeated form field, accepting both ``name`` and ``name[]``"""
    return request.form.getlist(name) or request.form.getlist(f'{name}[]')
