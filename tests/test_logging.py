"""요청 로깅 미들웨어 테스트 — 민감 필드 마스킹과 에러 사유 추출."""

from app.middleware.axiom_logging import _error_detail, _mask


class TestMasking:
    """마스킹 테스트."""

    def test_masks_sensitive_keys(self):
        data = {"email": "a@test.com", "password": "secret!", "nested": {"refresh_token": "t"}}
        assert _mask(data) == {"email": "a@test.com", "password": "***", "nested": {"refresh_token": "***"}}

    def test_truncates_long_strings(self):
        masked = _mask({"content": "x" * 5000})
        assert masked["content"].endswith("...(truncated)")
        assert len(masked["content"]) < 5000


class TestErrorDetail:
    def test_detail_from_json(self):
        assert _error_detail(b'{"detail": "Post not found"}') == "Post not found"

    def test_plain_text_body(self):
        assert _error_detail(b"Internal Server Error") == "Internal Server Error"
