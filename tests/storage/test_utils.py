import pytest

from filestorage.storage.exceptions import InvalidArgumentError
from filestorage.storage.local import FileSystemBucket
from filestorage.storage.schemas import BucketConfig, StorageConfig
from filestorage.storage.utils import import_class, validate_name, validate_string


class TestValidateName:
    """Bucket and storage name validation tests"""

    def test_valid_name(self):
        """Test a non empty string is returned unchanged"""
        assert validate_name("images", "bucket") == "images"

    def test_empty_name(self):
        """Test empty names are rejected"""
        with pytest.raises(InvalidArgumentError) as exc:
            validate_name("", "bucket")
        assert "should not be empty" in str(exc.value)

    def test_not_a_string(self):
        """Test non string names are rejected"""
        with pytest.raises(InvalidArgumentError) as exc:
            validate_name(5, "storage")
        assert "storage" in str(exc.value)


def test_validate_string():
    """Test string attributes are checked"""
    assert validate_string("", "Bucket.name") == ""
    with pytest.raises(InvalidArgumentError) as exc:
        validate_string(None, "Bucket.name")
    assert '"Bucket.name" should be a string!' in str(exc.value)


class TestImportClass:
    """Class lookup by dotted path"""

    def test_dotted_path(self):
        """Test a dotted path is imported"""
        assert import_class("filestorage.storage.local.FileSystemBucket") is FileSystemBucket

    def test_class_passes_through(self):
        """Test class objects are returned unchanged"""
        assert import_class(FileSystemBucket) is FileSystemBucket

    @pytest.mark.parametrize(
        "class_name",
        [
            "FileSystemBucket",
            "",
            "not_a_module.Bucket",
            "filestorage.storage.local.MissingBucket",
            "filestorage.storage.local.logging",
            42,
        ],
    )
    def test_invalid(self, class_name):
        """Test malformed or missing classes are rejected"""
        with pytest.raises(InvalidArgumentError):
            import_class(class_name)


class TestConfigRecords:
    """Bucket and storage configuration records"""

    def test_camel_case_keys(self):
        """Test camelCase keys fill the snake_case fields"""
        config = BucketConfig.model_validate({"baseSubPath": "image", "fileSubDirTemplate": "{ext}"})

        assert config.base_sub_path == "image"
        assert config.get_options() == {"base_sub_path": "image", "file_sub_dir_template": "{ext}"}

    def test_options_exclude_class_and_unset(self):
        """Test options carry neither the class nor missing values"""
        config = BucketConfig.model_validate({"class": FileSystemBucket})

        assert config.class_ is FileSystemBucket
        assert config.get_options() == {}

    def test_extra_options_snake_cased(self):
        """Test backend specific keys are handed over in snake_case"""
        config = StorageConfig.model_validate({
            "class": "filestorage.storage.local.FileSystemStorage",
            "basePath": "/data",
            "file_permission": 0o700,
        })

        assert config.get_options() == {"base_path": "/data", "file_permission": 0o700}

    def test_bucket_options_skip_injected_keys(self):
        """Test name and storage are left to the owning storage"""
        config = BucketConfig.model_validate({"name": "other", "storage": "x", "baseSubPath": "image"})

        assert config.get_options() == {"base_sub_path": "image"}
