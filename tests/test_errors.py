"""Tests for structured parse errors."""

import pickle

import pytest

from mat5 import ErrorKind, MatFileError, SizeMismatchError, SparseShapeMismatchError
from mat5.errors import annotate


class TestMatFileError:
    def test_fields_and_message(self):
        err = SizeMismatchError("12 bytes is not a multiple of 8", 136, "real part", 9)
        assert err.kind is ErrorKind.SIZE_MISMATCH
        assert err.offset == 136
        assert err.decoder == "real part"
        assert err.type_code == 9
        assert str(err) == (
            "size mismatch at offset 136, in real part, type code 9: "
            "12 bytes is not a multiple of 8"
        )

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            raise SparseShapeMismatchError("bad shifts", 8)

    def test_annotate_replaces_context(self):
        err = SizeMismatchError("detail", 40, "real part", 9)
        moved = annotate(err, offset=128, inner_offset=40)
        assert isinstance(moved, SizeMismatchError)
        assert (moved.offset, moved.inner_offset) == (128, 40)
        assert moved.decoder == "real part"
        assert "inflated offset 40" in str(moved)
        # The source error is left untouched
        assert err.offset == 40
        assert err.inner_offset is None

    def test_annotate_next_offset(self):
        err = SizeMismatchError("detail", 40, "real part", 9)
        assert err.next_offset is None
        moved = annotate(err, next_offset=72)
        assert moved.next_offset == 72
        assert moved.offset == 40
        assert err.next_offset is None

    def test_annotate_unknown_field(self):
        with pytest.raises(TypeError):
            annotate(SizeMismatchError("detail"), position=3)

    def test_pickle_roundtrip(self):
        err = SparseShapeMismatchError("bad shifts", 8, "sparse array", None, 2, 40)
        restored = pickle.loads(pickle.dumps(err))
        assert type(restored) is SparseShapeMismatchError
        assert str(restored) == str(err)
        assert restored.next_offset == 40

    def test_base_class_catches_all(self):
        with pytest.raises(MatFileError):
            raise SizeMismatchError("x")
