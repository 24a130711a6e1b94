from . import __version__ as intbits_version

from . import AppError
from .uint import uint_type, usize, WIDTHS

import sys
import getopt
import enum
import warnings
from typing import NamedTuple, Any

def main(argv=None):
    warnings.showwarning = _warning
    try:
        _main(sys.argv[1:] if argv is None else argv)
    except AppError as err:
        eprint(f'error: {err}')
        sys.exit(1)

def _main(argv):
    class Action(enum.Enum):
        UNSPEC = ''
        BIT = 'bit'
        BITS = 'bits'
        WITH_BIT = 'with-bit'
        WITH_BITS = 'with-bits'
        SHOW = 'show'
        VERSION = 'version'

    action = Action.UNSPEC
    params = ParamList()
    params.width = DefaultValue(32)
    params.format = DefaultValue('hex')

    try:
        opts, args = getopt.gnu_getopt(argv, 'w:f:',
            ['width=', 'format=', 'bit=', 'bits=', 'with-bit=', 'with-bits=',
            'show', 'version'])
    except getopt.GetoptError as err:
        raise ArgParseError(err)

    value_target = {
        'value': 'value',
        'width': 'width',
        'format': 'output format',
    }

    def select(new_action, target):
        nonlocal action
        if action not in (Action.UNSPEC, new_action):
            warnings.warn(f'action "{action.value}" overridden by "{new_action.value}"')
        action = new_action
        params.target = target

    for key, value in opts:
        param = Param(key, value)
        match key:
            case '-w' | '--width':
                params.width = _parse_param(param, _parse_width)
                _assert_param(params['width'], lambda x: x in WIDTHS)
            case '-f' | '--format':
                params.format = param
                _assert_param(params['format'], lambda x: x in ('hex', 'bin', 'dec'))
            case '--bit':
                select(Action.BIT, value_target | {'index': 'bit index'})
                params.index = _parse_param(param, _parse_int)
            case '--bits':
                select(Action.BITS, value_target | {'range': 'bit range'})
                params.range = _parse_param(param, _parse_range)
            case '--with-bit':
                select(Action.WITH_BIT, value_target | {'index': 'bit index', 'flag': 'bit value'})
                params.index, params.flag = _parse_assignment(param, _parse_int, _parse_flag)
            case '--with-bits':
                select(Action.WITH_BITS, value_target | {'range': 'bit range', 'field': 'bits'})
                params.range, params.field = _parse_assignment(param, _parse_range, _parse_int)
            case '--show':
                select(Action.SHOW, value_target)
            case '--version':
                select(Action.VERSION, {'version': None})
                params.version = param

    try:
        iargs = iter(args)
        params.value = _parse_param(Param.positional(next(iargs)), _parse_int)
        for arg in iargs:
            params.ignored = Param.positional(arg)
    except StopIteration:
        pass
    del iargs

    match action:
        case Action.UNSPEC:
            print_usage()
            sys.exit(1)
        case Action.VERSION:
            print(f'intbits v{intbits_version}')
            return

    params.check_target()
    value = uint_type(params.width)(params.value)
    match action:
        case Action.BIT:
            print(1 if value.bit(params.index) else 0)
        case Action.BITS:
            print(format_value(value.bits(params.range), params.width, params.format))
        case Action.WITH_BIT:
            result = value.with_bit(params.index, params.flag)
            print(format_value(result, params.width, params.format))
        case Action.WITH_BITS:
            result = value.with_bits(params.range, params.field)
            print(format_value(result, params.width, params.format))
        case Action.SHOW:
            show(value)

class Param(NamedTuple):
    cl_key: str
    value: Any = None

    @classmethod
    def positional(cls, value):
        return cls(cl_key=value, value=value)

class DefaultValue:
    __match_args__ = ('value', )
    def __init__(self, value):
        self.value = value

class ParamList:
    """Command line parameters, readable as attributes.

    Assigning a DefaultValue keeps an explicitly given parameter. Setting
    `target` (mapping of parameter key to its human-readable name) declares
    the parameters the selected action uses; others are warned about as
    ignored, missing ones are reported by check_target().
    """
    _reserved_fields = frozenset(['_paramdict', '_target', 'target', 'ignored'])

    def __init__(self):
        self._paramdict = dict()
        self._target = None

    @staticmethod
    def _warn_ignored_parameter(cl_key):
        if cl_key is not None:
            warnings.warn(f'parameter "{cl_key}" ignored')

    def __getattr__(self, key):
        try:
            return self._paramdict[key].value
        except KeyError:
            raise AttributeError(f'ParamList object has no attribute "{key}"') from None

    def __setattr__(self, key, value):
        if key in ParamList._reserved_fields:
            super().__setattr__(key, value)
        else:
            self._add_param(key, value)

    def __getitem__(self, key):
        return self._paramdict[key]

    def _add_param(self, key, value):
        match value:
            case DefaultValue(x):
                if key not in self._paramdict:
                    self._paramdict[key] = Param(None, x)
            case Param(_, _):
                self._paramdict[key] = value
                if self._target is not None and key not in self._target:
                    ParamList._warn_ignored_parameter(value.cl_key)
            case _:
                raise ValueError(f'invalid value assign: {value}')

    @property
    def target(self):
        return self._target

    @target.setter
    def target(self, value):
        self._target = value
        for key in self._paramdict.keys() - self._target.keys():
            ParamList._warn_ignored_parameter(self._paramdict[key].cl_key)

    @property
    def ignored(self):
        return None

    @ignored.setter
    def ignored(self, value):
        ParamList._warn_ignored_parameter(value.cl_key)

    def check_target(self):
        for (key, name) in self._target.items():
            if key not in self._paramdict:
                raise MissingParameter(name)

class ArgParseError(AppError):
    def __init__(self, err):
        super().__init__(err)
        self.err = err
    def __str__(self):
        return str(self.err)

class MissingParameter(AppError):
    def __init__(self, name):
        super().__init__(name)
        self.name = name
    def __str__(self):
        return f'no {self.name} provided'

class InvalidParameter(AppError):
    def __init__(self, param):
        super().__init__(param)
        self.param = param
    def __str__(self):
        return f'parameter "{self.param[0]}" has invalid value: "{self.param[1]}"'

def _parse_int(text):
    return int(text, 0)

def _parse_width(text):
    if text == 'native':
        return usize.N_BITS
    return int(text, 0)

def _parse_flag(text):
    match text.lower():
        case '1' | 'true':
            return True
        case '0' | 'false':
            return False
        case _:
            raise ValueError(text)

def _parse_range(text):
    lower, sep, upper = text.partition(':')
    if not sep:
        raise ValueError(text)
    return slice(_parse_int(lower) if lower else None,
        _parse_int(upper) if upper else None)

def _parse_param(param, parse):
    try:
        if type(param[1]) is str:
            return Param(param[0], parse(param[1]))
        else:
            return param
    except ValueError:
        raise InvalidParameter(param) from None

def _parse_assignment(param, parse_key, parse_value):
    key, sep, value = param[1].partition('=')
    if not sep:
        raise InvalidParameter(param)
    return (_parse_param(Param(param[0], key), parse_key),
        _parse_param(Param(param[0], value), parse_value))

def _assert_param(param, cond):
    if not cond(param[1]):
        raise InvalidParameter(param)

def format_value(value, width, fmt):
    match fmt:
        case 'hex':
            return f'{value:#0{width // 4 + 2}x}'
        case 'bin':
            return f'{value:#0{width + 2}b}'
        case 'dec':
            return f'{value:d}'

def show(value):
    for lower in reversed(range(0, value.N_BITS, 8)):
        upper = lower + 8
        octet = value.bits(slice(lower, upper))
        print(f'{upper - 1:3d}..{lower:<3d} {octet:08b} {octet:#04x}')

def eprint(*args, **kwargs):
    print(*args, **kwargs, file=sys.stderr)

def print_usage():
    usage = '''usage:
  intbits [-w WIDTH] [-f hex|bin|dec] VALUE --bit INDEX
  intbits [-w WIDTH] [-f hex|bin|dec] VALUE --bits LO:HI
  intbits [-w WIDTH] [-f hex|bin|dec] VALUE --with-bit INDEX=0|1
  intbits [-w WIDTH] [-f hex|bin|dec] VALUE --with-bits LO:HI=BITS
  intbits [-w WIDTH] VALUE --show
  intbits --version'''
    eprint(usage)

def _warning(message, category, filename, lineno, file=None, line=None):
    if file is None:
        file = sys.stderr
    print(f'warning: {message}', file=file)
