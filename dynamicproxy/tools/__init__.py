# -*- coding: utf-8 -*-
# Part of DynamicProxy, see License file for full copyright and licensing details.

from .config import config

from .func import *
from .lru import LRU
