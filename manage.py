#!/usr/bin/env python
import os
import sys
from pathlib import Path

# Permite rodar sem `pip install -e .` (layout src/ + libs/)
ROOT = Path(__file__).resolve().parent
for extra in ("src", "libs"):
    if str(ROOT / extra) not in sys.path:
        sys.path.insert(0, str(ROOT / extra))

from config.structlog_config import configure_logging  # noqa: E402

configure_logging(level=os.getenv("LOG_LEVEL", "DEBUG"))
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings')

def main():
    """Executa as tasks de gerenciamento do Django (migrate, seeds, purge…)."""
    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Não foi possível importar Django. Verifique se está instalado e no seu PYTHONPATH."
        ) from exc

    execute_from_command_line(sys.argv)

if __name__ == '__main__':
    main()
