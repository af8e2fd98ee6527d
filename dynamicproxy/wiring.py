# Part of DynamicProxy, see License file for full copyright and licensing details.

"""Hidden state of synthesized proxies."""
from __future__ import annotations

from .synthesizer import TypeBuilder

__all__ = [
    'TARGET_FIELD', 'TARGET_SETTER',
    'OBSERVER_FIELD', 'OBSERVER_SETTER',
    'add_state',
]

TARGET_FIELD = '__proxy_target__'
TARGET_SETTER = '__set_proxy_target__'
OBSERVER_FIELD = '__proxy_observer__'
OBSERVER_SETTER = '__set_proxy_observer__'


def add_state(builder: TypeBuilder, field: str, setter: str) -> TypeBuilder:
    """ Add the slot ``field`` and the routine ``setter(self, value)``
        storing its argument into it.
    """
    routine = builder.routine(setter, signature='self, value').emit(f'self.{field} = value')
    return builder.add_field(field).add_member(setter, routine.build())
