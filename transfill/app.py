#!/usr/bin/env python3
"""
transfill Web — API REST + WebSocket sobre o servico de traducao.
"""

import re
from dataclasses import asdict

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS
from flask_socketio import SocketIO, join_room
from werkzeug.middleware.proxy_fix import ProxyFix

from transfill.config import MAX_CONCURRENT_JOBS, SECRET_KEY, log
from transfill.jobs import (
    JobLimitError, cleanup_old_jobs, count_running_jobs, get_job, list_jobs,
    start_auto_translate,
)

# Regex para validar job_id (apenas hex, 8 chars) e codigos de idioma
_JOB_ID_RE = re.compile(r'^[a-f0-9]{8}$')
_LANGUAGE_RE = re.compile(r'^[A-Za-z0-9_-]{1,20}$')

try:
    import gevent  # noqa: F401
    _async_mode = 'gevent'
except ImportError:
    _async_mode = 'threading'

socketio = SocketIO(cors_allowed_origins="*", async_mode=_async_mode)

api = Blueprint('api', __name__, url_prefix='/api')


# ============================================================================
# Helpers
# ============================================================================

def _service():
    return current_app.extensions['transfill']


def _validate_language(language):
    return bool(language and _LANGUAGE_RE.match(language))


def _bad_language(language):
    return jsonify({'error': f'Codigo de idioma invalido: {language}'}), 400


# ============================================================================
# API REST
# ============================================================================

@api.route('/health')
def health():
    return jsonify({'status': 'ok', 'service': 'transfill'})


@api.route('/stats')
def stats():
    return jsonify({
        'engine': _service().engine.get_stats(),
        'jobs_running': count_running_jobs(),
    })


@api.route('/languages', methods=['GET'])
def languages():
    service = _service()
    return jsonify({
        'languages': service.all_languages(),
        'source_language': service.source_language,
    })


@api.route('/languages', methods=['POST'])
def add_language():
    data = request.get_json(silent=True) or {}
    language = (data.get('language') or '').strip()
    name = (data.get('name') or '').strip() or None

    if not _validate_language(language):
        return _bad_language(language)

    try:
        _service().add_language(language, name)
    except ValueError as e:
        return jsonify({'error': str(e)}), 409

    log.info(f'[API] Idioma adicionado: {language}')
    return jsonify({'language': language, 'name': name or language}), 201


@api.route('/languages/<language>/translations', methods=['GET'])
def translations(language):
    if not _validate_language(language):
        return _bad_language(language)

    service = _service()
    needle = request.args.get('filter', '')
    return jsonify({
        'language': language,
        'source_language': service.source_language,
        'translations': service.filter_translations_for(language, needle),
    })


@api.route('/languages/<language>/translations', methods=['POST'])
def add_translation(language):
    if not _validate_language(language):
        return _bad_language(language)

    data = request.get_json(silent=True) or {}
    key = data.get('key') or ''
    if not key:
        return jsonify({'error': 'Chave obrigatoria'}), 400

    try:
        event = _service().add_translation(
            language,
            key,
            data.get('value') or '',
            group=(data.get('group') or '').strip() or None,
            namespace=(data.get('namespace') or '').strip() or None,
        )
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    return jsonify({'translation': asdict(event)}), 201


@api.route('/languages/<language>/missing', methods=['GET'])
def missing(language):
    if not _validate_language(language):
        return _bad_language(language)

    service = _service()
    if request.args.get('include_empty', '').lower() in ('1', 'true', 'yes'):
        result = service.find_untranslated_translations(language)
    else:
        result = service.find_missing_translations(language)

    count = sum(len(keys) for groups in result.values() for keys in groups.values())
    return jsonify({'language': language, 'missing': result, 'count': count})


@api.route('/languages/<language>/missing', methods=['POST'])
def save_missing(language):
    if not _validate_language(language):
        return _bad_language(language)

    saved = _service().save_missing_translations(language)
    return jsonify({'language': language, 'saved': saved})


@api.route('/auto-translate', methods=['POST'])
def auto_translate():
    data = request.get_json(silent=True) or {}
    language = (data.get('language') or '').strip() or None
    if language is not None and not _validate_language(language):
        return _bad_language(language)

    cleanup_old_jobs()
    try:
        job = start_auto_translate(
            _service(), language, socketio,
            background=current_app.config.get('TRANSFILL_BACKGROUND_JOBS', True),
            max_running=MAX_CONCURRENT_JOBS,
        )
    except JobLimitError as e:
        log.warning(f'{request.remote_addr} bloqueado: {e.running} jobs rodando (max {e.limit})')
        return jsonify({'error': f'Limite de {e.limit} jobs simultaneos'}), 429

    log.info(f'{request.remote_addr} job criado: {job.job_id} ({language or "todos os idiomas"})')
    return jsonify({'job_id': job.job_id, 'job': job.to_dict()}), 202


@api.route('/jobs')
def jobs():
    return jsonify({'jobs': list_jobs()})


@api.route('/jobs/<job_id>')
def job_status(job_id):
    if not _JOB_ID_RE.match(job_id):
        return jsonify({'error': 'job_id invalido'}), 400
    job = get_job(job_id)
    if not job:
        return jsonify({'error': 'Job nao encontrado'}), 404
    return jsonify(job.to_dict())


# ============================================================================
# WebSocket
# ============================================================================

@socketio.on('connect')
def ws_connect():
    log.debug(f'WS conectado: {request.remote_addr}')


@socketio.on('disconnect')
def ws_disconnect():
    log.debug(f'WS desconectado: {request.remote_addr}')


@socketio.on('join_job')
def ws_join_job(data):
    job_id = (data or {}).get('job_id', '')
    if not _JOB_ID_RE.match(job_id):
        return
    job = get_job(job_id)
    if not job:
        return
    join_room(job_id)
    log.debug(f'WS join_job: {job_id} ({request.remote_addr})')
    socketio.emit('job_progress', job.to_dict(), room=job_id)


# ============================================================================
# App
# ============================================================================

def _emit_translation_added(event):
    socketio.emit('translation_added', asdict(event))


def create_app(service=None, background_jobs=True):
    """Cria a aplicacao Flask. Sem `service`, monta um a partir da configuracao."""
    if service is None:
        from transfill.service import create_service
        service = create_service()

    app = Flask(__name__)

    # Confiar em 1 proxy (Nginx) para X-Forwarded-For e X-Forwarded-Proto
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1)
    app.secret_key = SECRET_KEY
    app.config['TRANSFILL_BACKGROUND_JOBS'] = background_jobs
    app.extensions['transfill'] = service

    CORS(app)
    app.register_blueprint(api)
    socketio.init_app(app)

    service.add_listener(_emit_translation_added)

    @app.after_request
    def security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    @app.before_request
    def log_request():
        if request.path.startswith('/api'):
            log.info(f'{request.remote_addr} {request.method} {request.path}')

    log.info(
        f'[API] App criada (idioma de origem: {service.source_language}, '
        f'async_mode: {_async_mode})'
    )
    return app
