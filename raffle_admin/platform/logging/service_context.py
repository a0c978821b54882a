"""
Service context extraction for logging.

Identifies which operator workstation / deployment produced a log line.
"""

import os
import socket
from functools import lru_cache


@lru_cache(maxsize=1)
def get_service_context() -> str:
    service_name = os.getenv('SERVICE_NAME', 'raffle-admin')
    deploy_env = os.getenv('DEPLOY_ENV', 'local_dev')

    try:
        host = socket.gethostname().split('.')[0] or 'local'
    except OSError:
        host = 'local'

    return f'{service_name}@{deploy_env}:{host}:{os.getpid()}'
