"""
Helpers Module - Utility functions for form handling
"""

from flask import current_app, request


def allowed_file(filename):
    """Check if file extension is allowed for uploads"""
    allowed_extensions = current_app.config.get('ALLOWED_UPLOAD_EXTENSIONS', set())
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed_extensions


def file_extension(filename):
    return filename.rsplit('.', 1)[1].lower() if '.' in filename else ''


def get_form_data():
    """Read submitted fields from either a form post or a JSON body"""
    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form


def clean_fields(source, names, max_length=5000):
    """Strip and truncate string fields"""
    cleaned = {}
    for name in names:
        value = source.get(name, '')
        cleaned[name] = str(value).strip()[:max_length] if value is not None else ''
    return cleaned


def missing_fields(data, required):
    return [name for name in required if not data.get(name)]


def get_list_field(source, name):
    """Read a multi-valued field (``name`` or ``name[]``) from a form or JSON body"""
    if hasattr(source, 'getlist'):
        values = source.getlist(name) or source.getlist(f'{name}[]')
    else:
        values = source.get(name) or []
        if isinstance(values, str):
            values = [values]
        elif not isinstance(values, (list, tuple)):
            return []
    return [str(v).strip() for v in values if str(v).strip()]


__all__ = [
    'allowed_file',
    'file_extension',
    'get_form_data',
    'clean_fields',
    'missing_fields',
    'get_list_field'
]
