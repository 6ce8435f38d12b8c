"""
Jobs de traducao automatica disparados pela API.
Cada job roda o pipeline sequencial do servico em uma thread propria e
publica o progresso via WebSocket.
"""

import threading
import uuid
from datetime import datetime, timedelta

from transfill.config import log


class JobLimitError(RuntimeError):
    """Limite de jobs simultaneos atingido."""

    def __init__(self, running, limit):
        super().__init__(f'Limite de {limit} jobs simultaneos ({running} rodando)')
        self.running = running
        self.limit = limit


# ============================================================================
# Model — Job de traducao automatica
# ============================================================================

class AutoTranslateJob:
    """Representa um job de traducao automatica com estado e progresso."""

    def __init__(self, job_id, language=None):
        self.job_id = job_id
        self.language = language

        # Estado
        self.status = 'pending'
        self.current_language = ''
        self.done = 0
        self.total = 0
        self.reports = {}
        self.errors = []

        # Timestamps
        self.created_at = datetime.now().isoformat()
        self.started_at = None
        self.finished_at = None

    @property
    def progress(self):
        if not self.total:
            return 0
        return int((self.done / self.total) * 100)

    def to_dict(self):
        return {
            'job_id': self.job_id,
            'language': self.language,
            'status': self.status,
            'progress': self.progress,
            'current_language': self.current_language,
            'done': self.done,
            'total': self.total,
            'reports': {code: report.to_dict() for code, report in self.reports.items()},
            'errors': self.errors[-10:],
            'created_at': self.created_at,
            'started_at': self.started_at,
            'finished_at': self.finished_at,
        }


# ============================================================================
# Registro global de jobs (em memoria)
# ============================================================================

_jobs = {}
_jobs_lock = threading.Lock()


def get_job(job_id):
    with _jobs_lock:
        return _jobs.get(job_id)


def list_jobs():
    with _jobs_lock:
        jobs = [j.to_dict() for j in _jobs.values()]
    return sorted(jobs, key=lambda x: x['created_at'], reverse=True)


def _count_running_locked():
    return sum(1 for j in _jobs.values() if j.status in ('pending', 'running'))


def count_running_jobs():
    """Conta quantos jobs estao em execucao."""
    with _jobs_lock:
        return _count_running_locked()


def cleanup_old_jobs(max_age_hours=24):
    """Remove da memoria jobs finalizados com mais de X horas."""
    limit = datetime.now() - timedelta(hours=max_age_hours)
    with _jobs_lock:
        old = [
            jid for jid, job in _jobs.items()
            if job.status in ('completed', 'failed')
            and datetime.fromisoformat(job.created_at) < limit
        ]
        for jid in old:
            del _jobs[jid]
    if old:
        log.info(f'[JOB] Cleanup: {len(old)} jobs antigos removidos')
    return len(old)


# ============================================================================
# Execucao
# ============================================================================

def _emit(socketio, event, job):
    if socketio is not None:
        socketio.emit(event, job.to_dict(), room=job.job_id)


def _run(job, service, socketio):
    """Thread principal do job."""
    job.status = 'running'
    job.started_at = datetime.now().isoformat()
    _emit(socketio, 'job_progress', job)

    def on_progress(language, done, total):
        job.current_language = language
        job.done = done
        job.total = total
        _emit(socketio, 'job_progress', job)

    def on_language_done(language, report):
        job.reports[language] = report
        _emit(socketio, 'job_progress', job)

    try:
        service.auto_translate(job.language, notify=on_language_done, progress=on_progress)
        job.status = 'completed'
        log.info(f'[JOB] [{job.job_id}] Concluido: {", ".join(job.reports) or "nenhum idioma"}')
    except Exception as e:
        job.status = 'failed'
        job.errors.append(f'Erro fatal: {e}')
        log.error(f'[JOB] [{job.job_id}] FALHA FATAL: {e}', exc_info=True)
    finally:
        job.current_language = ''
        job.finished_at = datetime.now().isoformat()
        _emit(socketio, 'job_done', job)


def start_auto_translate(service, language=None, socketio=None, background=True,
                         max_running=None):
    """
    Inicia novo job de traducao automatica. Retorna o job.
    Com `max_running`, a contagem e o registro sao atomicos: JobLimitError
    se ja houver `max_running` jobs pendentes ou rodando.
    """
    job = AutoTranslateJob(uuid.uuid4().hex[:8], language)

    with _jobs_lock:
        if max_running is not None:
            running = _count_running_locked()
            if running >= max_running:
                raise JobLimitError(running, max_running)
        _jobs[job.job_id] = job

    if background:
        threading.Thread(target=_run, args=(job, service, socketio), daemon=True).start()
        log.info(f'[JOB] [{job.job_id}] Thread de traducao iniciada ({language or "todos os idiomas"})')
    else:
        _run(job, service, socketio)

    return job
