# -*- coding: utf-8 -*-
"""
Memory Model - Buffers holding kernel data and accessors viewing them.

A ``Buffer`` is a multi-dimensional array of a fixed element type. It
either owns a numpy allocation or wraps caller-provided host memory
(any C-contiguous object exposing the buffer protocol) without copying.
Buffers built over read-only host memory are read-only.

An ``Accessor`` is how kernels read and write a buffer. It can be
indexed three ways, all resolving to the same element:

- an ``int``: row-major offset into the flattened storage,
- an ``Id`` (or tuple): multi-dimensional coordinate,
- an ``Item``: the item's global index.

Accessors keep only a weak reference to their buffer, so they never
extend its lifetime. Writes through an accessor of a read-only buffer
raise ``ReadOnlyBufferError`` whatever the access mode tag says.

Dependencies
------------
numpy

Author
------
hsycl contributors

License
-------
MIT License
Copyright (c) 2026 hsycl contributors
See LICENSE file for full text.

Created
-------
2026-10-15

Modified
--------
2026-10-15
"""

# Standard library
import logging
import weakref
from typing import Any, Iterable, Optional, Tuple, Union

# Third-party
import numpy as np

# hsycl internal
from hsycl.core.access import AccessMode, AccessTarget
from hsycl.core.exceptions import (
    BufferReleasedError,
    DimensionMismatchError,
    OutOfBoundsError,
    ReadOnlyBufferError,
)
from hsycl.core.item import Item
from hsycl.core.ranges import Range, RangeLike, as_range

logger = logging.getLogger(__name__)


def _as_host_array(host_data: Any) -> np.ndarray:
    """View ``host_data`` as a numpy array without copying."""
    if isinstance(host_data, np.ndarray):
        return host_data
    try:
        return np.asarray(memoryview(host_data))
    except TypeError as e:
        raise TypeError(
            "host_data must be a numpy array or support the buffer "
            f"protocol, got {type(host_data).__name__}"
        ) from e


class Buffer:
    """A multi-dimensional array of elements used by kernels.

    Parameters
    ----------
    extent : RangeLike
        Number of elements in each dimension (1 to 3 dimensions).
    host_data : Optional[Any]
        Host memory to wrap. Must be C-contiguous, hold exactly
        ``extent.size()`` elements, and expose the buffer protocol
        (numpy arrays, ``bytearray``, ``array.array``, ...). The buffer
        aliases this memory. If None, a zero-filled array is allocated.
    dtype : Optional[np.dtype]
        Element type. Defaults to float64 for allocated buffers and to
        the host dtype for wrapped buffers, which must match if given.
    read_only : Optional[bool]
        Force read-only. Defaults to True exactly when ``host_data`` is
        not writeable (a const host pointer).

    Raises
    ------
    ValueError
        If the host data size or layout does not fit ``extent``, or a
        writable buffer is requested over read-only host data.
    TypeError
        If ``host_data`` cannot be wrapped, or its dtype differs from
        ``dtype``.
    """

    def __init__(
        self,
        extent: RangeLike,
        host_data: Optional[Any] = None,
        dtype: Optional[Union[np.dtype, type, str]] = None,
        read_only: Optional[bool] = None,
    ) -> None:
        self._extent = Range(*as_range(extent))
        shape = self._extent.to_tuple()

        if host_data is None:
            self._storage = np.zeros(
                shape, dtype=np.float64 if dtype is None else dtype
            )
            self._owns_storage = True
            self._read_only = bool(read_only)
        else:
            array = _as_host_array(host_data)
            if dtype is not None and np.dtype(dtype) != array.dtype:
                raise TypeError(
                    f"host_data dtype {array.dtype} does not match "
                    f"requested dtype {np.dtype(dtype)}"
                )
            if array.size != self._extent.size():
                raise ValueError(
                    f"host_data holds {array.size} elements, extent "
                    f"{shape} needs {self._extent.size()}"
                )
            if not array.flags.c_contiguous:
                raise ValueError("host_data must be C-contiguous to be wrapped")
            host_read_only = not array.flags.writeable
            if read_only is None:
                read_only = host_read_only
            elif not read_only and host_read_only:
                raise ValueError(
                    "Cannot create a writable buffer over read-only host data"
                )
            self._storage = array.reshape(shape)
            self._owns_storage = False
            self._read_only = read_only

        if self._read_only and self._storage.flags.writeable:
            # Fresh view so the caller's array keeps its own flag
            self._storage = self._storage.view()
            self._storage.flags.writeable = False

        logger.debug(
            "Created %s buffer %s of %s (read_only=%s)",
            "owned" if self._owns_storage else "wrapped",
            shape, self._storage.dtype, self._read_only,
        )

    @classmethod
    def copy_of(cls, other: 'Buffer') -> 'Buffer':
        """Create an owned, writable buffer holding a copy of ``other``."""
        buffer = cls(other.get_range(), dtype=other.dtype)
        buffer._storage[...] = other._storage
        return buffer

    @classmethod
    def from_elements(
        cls,
        elements: Iterable[Any],
        dtype: Optional[Union[np.dtype, type, str]] = None,
    ) -> 'Buffer':
        """Create an owned 1-D buffer holding a copy of ``elements``."""
        data = np.array(list(elements), dtype=dtype)
        if data.ndim != 1:
            raise ValueError(
                f"from_elements expects scalar elements, got shape {data.shape}"
            )
        buffer = cls(Range(len(data)), dtype=data.dtype)
        buffer._storage[...] = data
        return buffer

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    @property
    def dimensions(self) -> int:
        return len(self._extent)

    @property
    def read_only(self) -> bool:
        """Whether writes through accessors are rejected."""
        return self._read_only

    @property
    def owns_storage(self) -> bool:
        """False when the buffer wraps caller-provided host memory."""
        return self._owns_storage

    def get_range(self) -> Range:
        return Range(*self._extent)

    def get_count(self) -> int:
        """Total number of elements."""
        return self._extent.size()

    def get_size(self) -> int:
        """Size of the storage in bytes."""
        return self._storage.nbytes

    def get_access(
        self,
        mode: AccessMode = AccessMode.READ_WRITE,
        target: AccessTarget = AccessTarget.GLOBAL_BUFFER,
        checked: bool = True,
    ) -> 'Accessor':
        """Return an accessor over this buffer.

        Parameters
        ----------
        mode : AccessMode
            Advisory access mode tag.
        target : AccessTarget
            Advisory access target tag.
        checked : bool
            Raise OutOfBoundsError on bad indices. If False, indices go
            straight to numpy, which wraps negative values.

        Returns
        -------
        Accessor
        """
        return Accessor(self, mode=mode, target=target, checked=checked)

    def to_numpy(self) -> np.ndarray:
        """Copy of the current contents."""
        return self._storage.copy()

    def __repr__(self) -> str:
        return (
            f"Buffer({self._extent.to_tuple()}, dtype={self.dtype}, "
            f"read_only={self._read_only}, owns_storage={self._owns_storage})"
        )


class Accessor:
    """Indexed view of a buffer's storage used inside kernels.

    Parameters
    ----------
    buffer : Buffer
        The buffer to access. Only a weak reference is kept.
    mode : AccessMode
        Advisory access mode tag.
    target : AccessTarget
        Advisory access target tag.
    checked : bool
        Validate every index against the buffer extent.
    """

    def __init__(
        self,
        buffer: Buffer,
        mode: AccessMode = AccessMode.READ_WRITE,
        target: AccessTarget = AccessTarget.GLOBAL_BUFFER,
        checked: bool = True,
    ) -> None:
        if not isinstance(buffer, Buffer):
            raise TypeError(
                f"An accessor is built from a Buffer, got {type(buffer).__name__}"
            )
        self._buffer_ref = weakref.ref(buffer)
        self._extent = buffer.get_range()
        self._mode = AccessMode(mode)
        self._target = AccessTarget(target)
        self._checked = checked

    @property
    def mode(self) -> AccessMode:
        return self._mode

    @property
    def target(self) -> AccessTarget:
        return self._target

    @property
    def checked(self) -> bool:
        return self._checked

    @property
    def dimensions(self) -> int:
        return len(self._extent)

    @property
    def dtype(self) -> np.dtype:
        return self._buffer().dtype

    @property
    def read_only(self) -> bool:
        return self._buffer().read_only

    def get_range(self) -> Range:
        return Range(*self._extent)

    def get_count(self) -> int:
        return self._extent.size()

    def __getitem__(self, key: Any) -> Any:
        storage = self._buffer()._storage
        location = self._locate(key)
        if isinstance(location, tuple):
            return storage[location]
        return storage.reshape(-1)[location]

    def __setitem__(self, key: Any, value: Any) -> None:
        buffer = self._buffer()
        if buffer.read_only:
            raise ReadOnlyBufferError(
                f"Cannot write {self._describe(key)} of a read-only buffer"
            )
        location = self._locate(key)
        if isinstance(location, tuple):
            buffer._storage[location] = value
        else:
            buffer._storage.reshape(-1)[location] = value

    def _buffer(self) -> Buffer:
        buffer = self._buffer_ref()
        if buffer is None:
            raise BufferReleasedError(
                "The buffer behind this accessor has been released"
            )
        return buffer

    def _locate(self, key: Any) -> Union[int, Tuple[int, ...]]:
        """Turn an accessor key into a linear offset or a coordinate tuple."""
        if isinstance(key, Item):
            key = key.get_global()
        if isinstance(key, (Range, tuple, list)):
            coords = tuple(int(k) for k in key)
            if len(coords) != len(self._extent):
                raise DimensionMismatchError(
                    len(self._extent), len(coords), "accessor and index"
                )
            if self._checked:
                for dim, (coord, size) in enumerate(zip(coords, self._extent)):
                    if not 0 <= coord < size:
                        raise OutOfBoundsError(
                            coords, self._extent.to_tuple(), dim
                        )
            return coords
        if isinstance(key, (int, np.integer)) and not isinstance(key, bool):
            offset = int(key)
            if self._checked and not 0 <= offset < self._extent.size():
                raise OutOfBoundsError(offset, self._extent.size())
            return offset
        raise TypeError(
            "Accessor index must be an int, Id, tuple or Item, got "
            f"{type(key).__name__}"
        )

    @staticmethod
    def _describe(key: Any) -> str:
        if isinstance(key, Item):
            key = key.get_global()
        if isinstance(key, Range):
            key = key.to_tuple()
        return f"element {key}"

    def __repr__(self) -> str:
        return (
            f"Accessor({self._extent.to_tuple()}, mode={self._mode.name}, "
            f"target={self._target.name})"
        )
