# -*- coding: utf-8 -*-
# Part of DynamicProxy, see License file for full copyright and licensing details.

RELEASE_LEVELS = [ALPHA, BETA, CANDIDATE, FINAL] = ['alpha', 'beta', 'candidate', 'final']
RELEASE_LEVELS_DISPLAY = {
    ALPHA: 'a',
    BETA: 'b',
    CANDIDATE: 'rc',
    FINAL: '',
}

# version_info format: (MAJOR, MINOR, MICRO, RELEASE_LEVEL, SERIAL)
# inspired by Python's own sys.version_info, in order to be
# properly comparable using normal operators, for example:
#  (1,1,0,'beta',0) < (1,1,0,'candidate',1) < (1,1,0,'final',0)
version_info = (1, 0, 0, BETA, 1)
version = '.'.join(str(s) for s in version_info[:3]) + RELEASE_LEVELS_DISPLAY[version_info[3]] + str(version_info[4] or '')
series = major_version = '.'.join(str(s) for s in version_info[:2])

product_name = 'DynamicProxy'
description = 'Runtime forwarding proxies with call observers'
long_desc = '''DynamicProxy synthesizes, at runtime, a class implementing a given
contract that forwards every operation to a wrapped implementation, optionally
notifying an observer before and after each call.'''
classifiers = """Development Status :: 4 - Beta
License :: OSI Approved :: GNU General Public License v3 (GPLv3)
Programming Language :: Python
Programming Language :: Python :: 3
"""
url = 'https://github.com/dynamicproxy/dynamicproxy'
author = 'DynamicProxy'
author_email = 'info@dynamicproxy.dev'
license = 'GPLv3'
