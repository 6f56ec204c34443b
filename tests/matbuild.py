"""Builders for synthetic MAT-file buffers used across the tests."""

import struct
import zlib

import numpy as np

MI_INT8 = 1
MI_UINT8 = 2
MI_INT16 = 3
MI_UINT16 = 4
MI_INT32 = 5
MI_UINT32 = 6
MI_SINGLE = 7
MI_DOUBLE = 9
MI_INT64 = 12
MI_UINT64 = 13
MI_MATRIX = 14
MI_COMPRESSED = 15

MX_CELL = 1
MX_STRUCT = 2
MX_OBJECT = 3
MX_CHAR = 4
MX_SPARSE = 5
MX_DOUBLE = 6
MX_SINGLE = 7
MX_INT8 = 8
MX_UINT8 = 9
MX_INT16 = 10
MX_INT32 = 12

_NP_CODES = {
    MI_INT8: "i1", MI_UINT8: "u1", MI_INT16: "i2", MI_UINT16: "u2",
    MI_INT32: "i4", MI_UINT32: "u4", MI_SINGLE: "f4", MI_DOUBLE: "f8",
    MI_INT64: "i8", MI_UINT64: "u8",
}


def header(text=b"MATLAB 5.0 MAT-file, synthetic", byte_order="<", version=0x0100, marker=None):
    if marker is None:
        marker = b"IM" if byte_order == "<" else b"MI"
    return (
        text.ljust(116, b" ")
        + b"\x00" * 8
        + struct.pack(byte_order + "H", version)
        + marker
    )


def element(data_type, payload, byte_order="<", compact=False, pad=True):
    if compact:
        assert len(payload) <= 4
        word = struct.pack(byte_order + "I", (len(payload) << 16) | data_type)
        return word + payload.ljust(4, b"\x00")
    out = struct.pack(byte_order + "II", data_type, len(payload)) + payload
    if pad and len(payload) % 8:
        out += b"\x00" * (8 - len(payload) % 8)
    return out


def numeric(data_type, values, byte_order="<"):
    raw = np.asarray(values, dtype=np.dtype(byte_order + _NP_CODES[data_type])).tobytes()
    return element(data_type, raw, byte_order, compact=0 < len(raw) <= 4)


def matrix(array_class, dims, name="", body=b"", byte_order="<",
           complex_=False, logical=False, global_=False, nzmax=0):
    flags_word = array_class
    if complex_:
        flags_word |= 0x0800
    if global_:
        flags_word |= 0x0400
    if logical:
        flags_word |= 0x0200
    flags = element(MI_UINT32, struct.pack(byte_order + "II", flags_word, nzmax), byte_order)
    dims_el = element(MI_INT32, struct.pack(f"{byte_order}{len(dims)}i", *dims), byte_order)
    raw_name = name.encode()
    name_el = element(MI_INT8, raw_name, byte_order, compact=0 < len(raw_name) <= 4)
    return element(MI_MATRIX, flags + dims_el + name_el + body, byte_order)


def double_matrix(name, values, dims=None, byte_order="<", imag=None, data_type=MI_DOUBLE):
    values = np.asarray(values)
    if dims is None:
        dims = (1, values.size)
    body = numeric(data_type, values.ravel(order="F"), byte_order)
    if imag is not None:
        body += numeric(data_type, np.asarray(imag).ravel(order="F"), byte_order)
    return matrix(MX_DOUBLE, dims, name, body, byte_order, complex_=imag is not None)


def sparse_matrix(name, dims, row_index, column_shift, values, byte_order="<", imag=None):
    body = (
        numeric(MI_INT32, row_index, byte_order)
        + numeric(MI_INT32, column_shift, byte_order)
        + numeric(MI_DOUBLE, values, byte_order)
    )
    if imag is not None:
        body += numeric(MI_DOUBLE, imag, byte_order)
    return matrix(MX_SPARSE, dims, name, body, byte_order,
                  complex_=imag is not None, nzmax=max(len(values), 1))


def struct_matrix(name, dims, field_names, field_values, width=32, byte_order="<"):
    """``field_values`` is the flat list of nested elements in file order."""
    names = b"".join(n.encode().ljust(width, b"\x00") for n in field_names)
    body = (
        element(MI_INT32, struct.pack(byte_order + "i", width), byte_order, compact=True)
        + element(MI_INT8, names, byte_order)
        + b"".join(field_values)
    )
    return matrix(MX_STRUCT, dims, name, body, byte_order)


def compressed(inner, byte_order="<"):
    return element(MI_COMPRESSED, zlib.compress(inner), byte_order, pad=False)


def mat_file(*elements, byte_order="<"):
    return header(byte_order=byte_order) + b"".join(elements)
