from intbits import AppError

class InvalidBitIndex(AppError, IndexError):
    def __init__(self, index, width):
        super().__init__(index, width)
        self.index = index
        self.width = width
    def __str__(self):
        return f'invalid bit index: {self.index!r} (width {self.width})'

class InvalidBitRange(AppError, IndexError):
    def __init__(self, key, width):
        super().__init__(key, width)
        self.key = key
        self.width = width
    def __str__(self):
        return f'invalid bit range: {_format_key(self.key)} (width {self.width})'

class InvalidValue(AppError, ValueError):
    def __init__(self, value, width):
        super().__init__(value, width)
        self.value = value
        self.width = width
    def __str__(self):
        return f'value {self.value!r} does not fit in {self.width} unsigned bits'

class InvalidWidth(AppError, ValueError):
    def __init__(self, width):
        super().__init__(width)
        self.width = width
    def __str__(self):
        return f'unsupported integer width: {self.width!r}'

def _format_key(key):
    match key:
        case slice(start=lo, stop=hi, step=None | 1):
            lo = '' if lo is None else lo
            hi = '' if hi is None else hi
            return f'{lo}..{hi}'
        case range(start=lo, stop=hi, step=1):
            return f'{lo}..{hi}'
        case (lo, hi):
            return f'{lo}..{hi}'
        case _:
            return repr(key)
