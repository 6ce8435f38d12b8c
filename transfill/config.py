"""Configuracoes centralizadas do transfill."""

import os
import logging

# Diretorios base
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(BASE_DIR)

# Armazenamento de traducoes
DRIVER = os.environ.get('TRANSFILL_DRIVER', 'file')  # 'file' ou 'database'
LANG_PATH = os.environ.get('TRANSFILL_LANG_PATH', os.path.join(PROJECT_ROOT, 'lang'))
DB_PATH = os.environ.get('TRANSFILL_DB_PATH', os.path.join(BASE_DIR, 'translations.db'))
LOG_FILE = os.environ.get('TRANSFILL_LOG_FILE', os.path.join(BASE_DIR, 'transfill.log'))

# Scanner de codigo-fonte
SCAN_PATHS = [
    p for p in os.environ.get(
        'TRANSFILL_SCAN_PATHS',
        os.pathsep.join([os.path.join(PROJECT_ROOT, 'app'),
                         os.path.join(PROJECT_ROOT, 'resources')]),
    ).split(os.pathsep) if p
]
SCAN_EXTENSIONS = ('.php', '.js', '.ts', '.vue', '.jsx', '.tsx', '.html', '.py')
SCAN_IGNORED_DIRS = (
    'node_modules', '.git', 'vendor', 'storage', 'cache',
    'dist', 'build', '__pycache__',
)
TRANSLATION_METHODS = (
    'trans', '__', 'trans_choice', '@lang', '@choice',
    'Lang::get', 'Lang::choice', '_t', 'i18n.t', '$t',
)

# Traducao
SOURCE_LANG = os.environ.get('TRANSFILL_SOURCE_LANG', 'en')
TRANSLATE_PROVIDER = os.environ.get('TRANSFILL_PROVIDER', 'google_free')
PROVIDER_TIMEOUT = float(os.environ.get('TRANSFILL_PROVIDER_TIMEOUT', '15'))
DEEPL_API_KEY = os.environ.get('DEEPL_API_KEY', '')
MYMEMORY_EMAIL = os.environ.get('MYMEMORY_EMAIL')

# Estilo dos tokens substitutos por idioma ('digits' e o padrao).
# Newar: o Google converte digitos para a escrita Newar, entao usamos letras.
PLACEHOLDER_ENCODING = {
    'new': 'letters',
}

# Web
SECRET_KEY = os.environ.get('SECRET_KEY', os.urandom(32).hex())
MAX_CONCURRENT_JOBS = int(os.environ.get('TRANSFILL_MAX_JOBS', '2'))


# ============================================================================
# Logging
# ============================================================================

def setup_logging():
    """Configura logging para console + arquivo."""
    fmt = logging.Formatter(
        '[%(asctime)s] %(levelname)s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    root = logging.getLogger('transfill')
    root.setLevel(logging.DEBUG)
    if root.handlers:
        return root

    # Arquivo
    log_dir = os.path.dirname(LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    fh = logging.FileHandler(LOG_FILE, encoding='utf-8')
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)

    # Console (stderr)
    ch = logging.StreamHandler()
    ch.setLevel(logging.INFO)
    ch.setFormatter(fmt)

    root.addHandler(fh)
    root.addHandler(ch)

    return root


log = setup_logging()
