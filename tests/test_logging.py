"""Logging 설정 / 마스킹 테스트"""

import json
import logging

from songgpt.core.logging import JsonFormatter, TextFormatter, mask_sensitive_data


class TestMaskSensitiveData:
    def test_masks_token_and_password(self) -> None:
        masked = mask_sensitive_data(
            {"refresh_token": "abcdefghijklmnop", "password": "p", "email": "a@x.com"}
        )

        assert masked["refresh_token"] == "abcd...mnop"
        assert masked["password"] == "***"
        assert masked["email"] == "a@x.com"

    def test_nested(self) -> None:
        masked = mask_sensitive_data({"headers": {"Authorization": "Bearer abcdefghijkl"}})
        assert masked["headers"]["Authorization"] == "Bear...ijkl"

    def test_list_of_dicts(self) -> None:
        masked = mask_sensitive_data({"items": [{"api_key": "short"}, "plain"]})
        assert masked["items"] == [{"api_key": "***"}, "plain"]


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("songgpt.test", logging.INFO, __file__, 1, "hello", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


class TestFormatters:
    def test_json_formatter(self) -> None:
        line = JsonFormatter().format(_record(member_id=1, access_token="abcdefghijklmnop"))
        doc = json.loads(line)

        assert doc["message"] == "hello"
        assert doc["log.level"] == "info"
        assert doc["labels"] == {"member_id": 1, "access_token": "abcd...mnop"}

    def test_text_formatter_appends_extra(self) -> None:
        line = TextFormatter().format(_record(post_id=3))
        assert "hello" in line
        assert line.endswith("post_id=3")
