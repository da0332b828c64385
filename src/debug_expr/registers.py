"""i386 register file.

Eight 32-bit general purpose registers plus ``eip``.  The 16-bit names
(``ax`` .. ``di``) view the low half of the matching 32-bit register;
the 8-bit names view byte 0 (``al`` .. ``bl``) or byte 1
(``ah`` .. ``bh``) of ``eax`` .. ``ebx``.
"""

import numpy as np

from .errors import UnresolvedRegisterError

REGS_32 = ('eax', 'ecx', 'edx', 'ebx', 'esp', 'ebp', 'esi', 'edi')
REGS_16 = ('ax', 'cx', 'dx', 'bx', 'sp', 'bp', 'si', 'di')
REGS_8 = ('al', 'cl', 'dl', 'bl', 'ah', 'ch', 'dh', 'bh')

PC_NAMES = ('eip', 'pc')

# name -> (slot, shift, mask); slot 8 holds eip
_VIEWS = {}
for _i, _name in enumerate(REGS_32):
    _VIEWS[_name] = (_i, 0, 0xFFFFFFFF)
for _i, _name in enumerate(REGS_16):
    _VIEWS[_name] = (_i, 0, 0xFFFF)
for _i, _name in enumerate(REGS_8):
    _VIEWS[_name] = (_i & 3, 8 * (_i >> 2), 0xFF)
for _name in PC_NAMES:
    _VIEWS[_name] = (8, 0, 0xFFFFFFFF)


class RegisterFile:
    """Simulated CPU registers, addressable by name."""

    def __init__(self):
        self._regs = np.zeros(len(REGS_32) + 1, dtype=np.uint32)

    def lookup_register(self, name):
        """Resolve *name* (without ``$``) to ``(value, ok)``."""
        view = _VIEWS.get(name)
        if view is None:
            return 0, False
        slot, shift, mask = view
        return (int(self._regs[slot]) >> shift) & mask, True

    def get(self, name):
        """Value of register *name*; raises UnresolvedRegisterError."""
        val, ok = self.lookup_register(name)
        if not ok:
            raise UnresolvedRegisterError(name)
        return val

    def set(self, name, value):
        """Write *value* through the view *name*, truncated to its width."""
        view = _VIEWS.get(name)
        if view is None:
            raise UnresolvedRegisterError(name)
        slot, shift, mask = view
        old = int(self._regs[slot])
        new = (old & ~(mask << shift)) | ((value & mask) << shift)
        self._regs[slot] = new & 0xFFFFFFFF

    def dump(self):
        """``[(name, value)]`` for the 32-bit registers and ``eip``."""
        return [(name, self.get(name)) for name in REGS_32 + ('eip',)]
