# SPDX-License-Identifier: Apache-2.0

from collections import OrderedDict
from collections.abc import Mapping, MutableMapping


class CaseInsensitiveDict(MutableMapping):
    """
    Dictionary whose string keys are compared after casefolding,
    iteration returns the keys as they were last set.
    Metadata keys such as ``Image.BitmapPixelFormat`` are looked up
    through it.
    """

    def __init__(self, data=None, **kwargs):
        self._dict = OrderedDict()
        self.update(data or {}, **kwargs)

    def __setitem__(self, key, value):
        self._dict[key.casefold()] = (key, value)

    def __getitem__(self, key):
        return self._dict[key.casefold()][1]

    def __delitem__(self, key):
        del self._dict[key.casefold()]

    def __iter__(self):
        return (key for key, _ in self._dict.values())

    def __len__(self):
        return len(self._dict)

    def casefolded(self):
        return ((folded, item[1]) for folded, item in self._dict.items())

    def __eq__(self, other):
        if not isinstance(other, Mapping):
            return NotImplemented
        other = CaseInsensitiveDict(other)
        return dict(self.casefolded()) == dict(other.casefolded())

    def copy(self):
        return CaseInsensitiveDict(self._dict.values())

    def __repr__(self):
        return str(dict(self.items()))
