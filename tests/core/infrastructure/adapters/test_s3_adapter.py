import pytest
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter
from core.utils.constants import ENV_POST_IMAGES_BUCKET_NAME


class TestS3Adapter:
    def test_init_missing_bucket_env(self, monkeypatch):
        monkeypatch.delenv(ENV_POST_IMAGES_BUCKET_NAME, raising=False)

        with pytest.raises(RuntimeError):
            S3Adapter()

    def test_put_object_success(self, s3_bucket, s3_get_object):
        adapter = S3Adapter()

        adapter.put_object(key="Images/file_1.png", body=b"image-bytes", content_type="image/png")

        assert s3_get_object("Images/file_1.png") == b"image-bytes"
        head = adapter.head_object(key="Images/file_1.png")
        assert head["ContentType"] == "image/png"

    def test_head_object_missing_key_raises_client_error(self, s3_bucket):
        adapter = S3Adapter()

        with pytest.raises(ClientError) as exc:
            adapter.head_object(key="Images/missing.png")

        assert exc.value.response["Error"]["Code"] == "404"

    def test_delete_object_success(self, s3_put_object, object_exists):
        adapter = S3Adapter()
        s3_put_object("Images/file_del.png", b"data", "image/png")

        adapter.delete_object(key="Images/file_del.png")

        assert not object_exists("Images/file_del.png")

    def test_put_object_bubbles_client_error(self, monkeypatch, s3_bucket):
        adapter = S3Adapter()

        def raise_error(**_):
            raise ClientError({"Error": {"Code": "InternalError"}}, "PutObject")

        monkeypatch.setattr(adapter._client, "put_object", raise_error)

        with pytest.raises(ClientError):
            adapter.put_object(key="Images/x.png", body=b"data", content_type="image/png")

    def test_generate_presigned_url_adds_bucket(self, s3_bucket):
        adapter = S3Adapter()

        url = adapter.generate_presigned_url(
            method="get_object",
            params={"Key": "Images/file_1.png"},
            expires_in=3600,
        )

        assert adapter.bucket in url
        assert "Images/file_1.png" in url
        assert "X-Amz-Algorithm=AWS4-HMAC-SHA256" in url
        assert "X-Amz-Expires=3600" in url

    def test_iter_keys_filters_by_prefix(self, s3_put_object):
        adapter = S3Adapter()
        s3_put_object("Images/file_1.png", b"1")
        s3_put_object("Images/file_2.png", b"2")
        s3_put_object("other/readme.txt", b"3")

        assert sorted(adapter.iter_keys(prefix="Images/")) == [
            "Images/file_1.png",
            "Images/file_2.png",
        ]
