# -*- coding: utf-8 -*-
# Part of DynamicProxy. See LICENSE file for full copyright and licensing details.

""" DynamicProxy core library.

Runtime synthesis of forwarding proxies: :func:`create_proxy` builds, for any
contract class, an instance delegating every operation to a wrapped
implementation and optionally notifying an observer before and after each
call.
"""

import sys
MIN_PY_VERSION = (3, 10)
assert sys.version_info >= MIN_PY_VERSION, f"Outdated python version detected, DynamicProxy requires Python >= {'.'.join(map(str, MIN_PY_VERSION))} to run."

# ----------------------------------------------------------
# Imports
# ----------------------------------------------------------
from . import release
from . import tools
from . import netsvc

from .exceptions import ProxyError, SynthesisError, ActivationError
from .observers import NO_VALUE, NoValue, ProxyObserver, LoggingObserver, CallRecorder
from .contract import Operation, get_operations
from .proxy import create_proxy, proxy_type, synthesize, is_proxy, get_target, get_observer

__version__ = release.version
