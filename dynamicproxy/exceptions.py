# -*- coding: utf-8 -*-
# Part of DynamicProxy, see License file for full copyright and licensing details.


"""The DynamicProxy Exceptions module defines the errors raised while
building a proxy.

Failures raised by a wrapped implementation while a proxied operation runs
are never translated: they reach the caller of the proxy unchanged.
"""


class ProxyError(Exception):
    """Generic error raised by the proxy machinery itself."""

    def __init__(self, message):
        """
        :param message: description of the failure
        """
        super().__init__(message)


class SynthesisError(ProxyError):
    """The proxy type could not be constructed.

    .. admonition:: Example

        When a contract operation is a coroutine function, or when the
        contract cannot be subclassed.
    """


class ActivationError(ProxyError):
    """The synthesized type could not be turned into a working instance.

    .. admonition:: Example

        When the contract refuses instantiation, or when a state setter
        cannot be found on the synthesized type.
    """
