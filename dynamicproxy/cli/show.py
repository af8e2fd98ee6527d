# Part of DynamicProxy. See LICENSE file for full copyright and licensing details.
import argparse
import importlib
import logging
import sys
import textwrap
from pathlib import Path

from ..contract import DELETER, GETTER, METHOD, SETTER
from ..exceptions import ProxyError
from ..proxy import OPERATIONS_ATTR, synthesize
from ..tools import config
from . import Command

_logger = logging.getLogger(__name__)


def load_contract(path):
    """ Import the class designated by ``module:QualifiedName``. """
    module_name, sep, qualname = path.partition(':')
    if not sep or not module_name or not qualname:
        raise ValueError("expected module:Contract, got %r" % path)
    obj = importlib.import_module(module_name)
    for attr in qualname.split('.'):
        obj = getattr(obj, attr)
    return obj


def routine_of(cls, operation):
    member = vars(cls)[operation.name]
    if operation.kind == METHOD:
        return member
    return {GETTER: member.fget, SETTER: member.fset, DELETER: member.fdel}[operation.kind]


class Show(Command):
    """ Print the forwarding routines generated for a contract """
    def run(self, cmdargs):
        parser = argparse.ArgumentParser(
            prog=f'{Path(sys.argv[0]).name} {self.name}',
            description=self.__doc__.strip(),
            epilog="Other options (--log-level, --log-handler, -c) are read as server wide options.",
        )
        parser.add_argument('contract', help="contract to proxy, as module:Contract")
        parser.add_argument('--observed', action='store_true',
                            help="show the routines notifying an observer")
        args, others = parser.parse_known_args(cmdargs)
        config.parse_config(others, setup_logging=True)

        try:
            contract = load_contract(args.contract)
        except (ImportError, AttributeError, ValueError) as e:
            sys.exit("Cannot load contract %r: %s" % (args.contract, e))

        try:
            cls = synthesize(contract, observed=args.observed)
        except ProxyError as e:
            _logger.debug("synthesis failed", exc_info=True)
            sys.exit(str(e))

        operations = getattr(cls, OPERATIONS_ATTR)
        print("%s.%s -> %s (%d operations)" % (
            contract.__module__, contract.__qualname__, cls.__name__, len(operations)))
        for operation in operations:
            returns = 'value' if operation.returns_value else 'nothing'
            print()
            print("# %s %s(%s) returns %s" % (operation.kind, operation.name, operation.signature, returns))
            print(textwrap.dedent(routine_of(cls, operation).__source__).rstrip())
