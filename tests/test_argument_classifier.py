"""Tests for positional argument classification."""

import pytest

from storage_provisioner.errors import ArityError
from storage_provisioner.services.argument_classifier import ResourceKind, classify_arguments


VOLUME_TOKENS = ["vol1", "50 GB", "dr.strange", "user:dr.who:rw"]
BUCKET_TOKENS = ["vol1", "bucket1", "SSD", "true", "user:bob:r"]


class TestClassifyVolume:
    @pytest.mark.parametrize("count", [1, 2, 3, 4])
    def test_populates_one_option_per_extra_token(self, count):
        classified = classify_arguments(VOLUME_TOKENS[:count], ResourceKind.VOLUME)
        assert classified.identity == {"name": "vol1"}
        assert len(classified.supplied) == count - 1
        assert list(classified.options) == ["quota", "owner", "acl"]
        assert all(value is None for value in list(classified.options.values())[count - 1:])

    def test_full_mapping(self):
        classified = classify_arguments(VOLUME_TOKENS, ResourceKind.VOLUME)
        assert classified.options == {"quota": "50 GB", "owner": "dr.strange", "acl": "user:dr.who:rw"}

    @pytest.mark.parametrize("count", [0, 5])
    def test_out_of_range(self, count):
        tokens = (VOLUME_TOKENS + ["extra"])[:count]
        with pytest.raises(ArityError) as excinfo:
            classify_arguments(tokens, ResourceKind.VOLUME)
        assert excinfo.value.minimum == 1
        assert excinfo.value.maximum == 4
        assert excinfo.value.count == count


class TestClassifyBucket:
    @pytest.mark.parametrize("count", [2, 3, 4, 5])
    def test_populates_one_option_per_extra_token(self, count):
        classified = classify_arguments(BUCKET_TOKENS[:count], ResourceKind.BUCKET)
        assert classified.identity == {"volume_name": "vol1", "name": "bucket1"}
        assert len(classified.supplied) == count - 2

    def test_full_mapping(self):
        classified = classify_arguments(BUCKET_TOKENS, ResourceKind.BUCKET)
        assert classified.options == {"storage_type": "SSD", "versioning": "true", "acl": "user:bob:r"}

    def test_values_are_not_validated(self):
        classified = classify_arguments(["v", "b", "FLOPPY", "maybe"], ResourceKind.BUCKET)
        assert classified.supplied == {"storage_type": "FLOPPY", "versioning": "maybe"}

    @pytest.mark.parametrize("tokens", [[], ["vol1"], BUCKET_TOKENS + ["extra"]])
    def test_out_of_range(self, tokens):
        with pytest.raises(ArityError):
            classify_arguments(tokens, ResourceKind.BUCKET)
