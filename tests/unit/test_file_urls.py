"""
File: tests/unit/test_file_urls.py
Description: 文件签名链接生成器单元测试

本模块测试 SecureFileUrlGenerator：
1. 链接格式 (基础地址 + 引用路径 + token 查询参数)
2. 同一时间桶内结果稳定；跨桶后变化
3. 令牌可被存储服务侧校验
4. 空引用转换为存储故障

Created: 2026-10-19
"""

import time
from urllib.parse import parse_qs, urlsplit

import pytest

from profile_api.core.error_code import SystemErrorCode
from profile_api.core.exceptions import StorageFault
from profile_api.core.file_urls import SecureFileUrlGenerator
from profile_api.core.security import verify_file_token

BASE_URL = "https://files.example.test/files/"
NOW = 1_800_000_100.0  # 位于 900 秒桶 [1_800_000_000, 1_800_000_900) 内


@pytest.fixture
def generator() -> SecureFileUrlGenerator:
    return SecureFileUrlGenerator(base_url=BASE_URL, expire_seconds=900)


def test_expires_at_is_bucket_aligned(generator: SecureFileUrlGenerator) -> None:
    expires_at = generator.expires_at(NOW)

    assert expires_at % 900 == 0
    # 有效期至少一个完整的桶
    assert expires_at - NOW >= 900
    assert expires_at - NOW < 1800


def test_sign_url_shape(generator: SecureFileUrlGenerator) -> None:
    url = generator.sign("/uploads/ada/birth certificate.pdf", now=time.time())
    parts = urlsplit(url)

    assert f"{parts.scheme}://{parts.netloc}" == "https://files.example.test"
    assert parts.path == "/files/uploads/ada/birth%20certificate.pdf"

    token = parse_qs(parts.query)["token"][0]
    assert verify_file_token(token, "/uploads/ada/birth certificate.pdf")


def test_sign_is_stable_within_bucket(generator: SecureFileUrlGenerator) -> None:
    first = generator.sign("uploads/ada/passport.jpg", now=NOW)
    second = generator.sign("uploads/ada/passport.jpg", now=NOW + 500)

    assert first == second


def test_sign_changes_across_buckets(generator: SecureFileUrlGenerator) -> None:
    first = generator.sign("uploads/ada/passport.jpg", now=NOW)
    later = generator.sign("uploads/ada/passport.jpg", now=NOW + 900)

    assert first != later


def test_sign_distinct_references(generator: SecureFileUrlGenerator) -> None:
    assert generator.sign("a.pdf", now=NOW) != generator.sign("b.pdf", now=NOW)


def test_sign_empty_reference(generator: SecureFileUrlGenerator) -> None:
    with pytest.raises(StorageFault) as exc_info:
        generator.sign("")

    assert exc_info.value.error is SystemErrorCode.FILE_STORAGE_ERROR
    assert exc_info.value.message == "Storage error"


def test_defaults_from_settings() -> None:
    generator = SecureFileUrlGenerator()

    assert generator.base_url == "https://files.example.test/files"
    assert generator.expire_seconds == 900
