# Part of DynamicProxy, see License file for full copyright and licensing details.

from .command import Command, main

from . import show
