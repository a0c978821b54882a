from inspect import getfile, getsourcelines
from os.path import basename
from re import sub
from time import time
from typing import Any, Callable

from raffle_admin.platform.logging.loguru_io_config import (
    SENSITIVE_KEYWORDS,
    call_depth_var,
    chain_start_time_var,
)


MAX_CONTENT_LENGTH = 500
MASK = '********'


def get_chain_start_time() -> float:
    if not (start_time := chain_start_time_var.get()):
        start_time = time()
        chain_start_time_var.set(start_time)
    return start_time


def build_call_target_func_path(func: Callable[..., Any]) -> str:
    try:
        lineno = getsourcelines(func)[1]
    except (OSError, TypeError):
        lineno = 0
    return f'{basename(getfile(getattr(func, "__func__", func)))}::{func.__qualname__}:{lineno}'


def reset_call_depth() -> None:
    layer = call_depth_var.get() - 1
    call_depth_var.set(layer)
    if not layer:
        chain_start_time_var.set(0)


def mask_sensitive(data_str: Any) -> Any:
    """Mask `key='value'` / `key: value` fragments of sensitive keys inside a repr."""
    data_str_ = str(data_str)
    pattern = r"(\b(?:%s)\b)(['\"]?\s*[:=]\s*)(['\"]?)[^'\",\s)}]+" % '|'.join(SENSITIVE_KEYWORDS)
    new_data_str = sub(pattern, rf'\1\2\3{MASK}', data_str_)
    return data_str if data_str_ == new_data_str else new_data_str


def should_mask_keyword(keyword: Any, value: Any) -> Any:
    return MASK if str(keyword).lower() in SENSITIVE_KEYWORDS else value


def truncate_content(content: Any) -> Any:
    text = str(content)
    if len(text) <= MAX_CONTENT_LENGTH:
        return content
    return f'{text[:MAX_CONTENT_LENGTH]}... (+{len(text) - MAX_CONTENT_LENGTH} chars)'
