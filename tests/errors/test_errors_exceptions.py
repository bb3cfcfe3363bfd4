import unittest

from sdinventory.errors import (
    AccessDeniedError,
    ApiError,
    AuthError,
    CheckpointError,
    ConfigError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InventoryError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    SetupError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = InventoryError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_details_default_to_empty(self) -> None:
        self.assertEqual(SetupError("no sheet").details, {})

    def test_hierarchy(self) -> None:
        self.assertTrue(issubclass(ConfigError, InvalidArgumentError))
        for cls in (CheckpointError, SetupError, ConflictError, ApiError):
            self.assertTrue(issubclass(cls, InventoryError))

    def test_map_http_error_basic(self) -> None:
        cases = {
            400: InvalidArgumentError,
            401: AuthError,
            404: NotFoundError,
            409: ConflictError,
            412: ConflictError,
            429: RateLimitError,
        }
        for status, expected in cases.items():
            with self.subTest(status=status):
                err = map_http_error(HttpErrorInfo(status_code=status, message="m"))
                self.assertIsInstance(err, expected)
                self.assertEqual(err.details["status_code"], status)

    def test_map_http_error_403_quota_vs_permission(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="userRateLimitExceeded", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="insufficientFilePermissions", message="x")
        )
        self.assertIsInstance(err, AccessDeniedError)

    def test_map_http_error_5xx_and_unknown_are_api_errors(self) -> None:
        self.assertIsInstance(map_http_error(HttpErrorInfo(status_code=503)), ApiError)
        err = map_http_error(HttpErrorInfo(status_code=418))
        self.assertIsInstance(err, ApiError)
        self.assertEqual(str(err), "HTTP error 418")

    def test_map_http_error_keeps_cause(self) -> None:
        cause = ValueError("x")
        err = map_http_error(HttpErrorInfo(status_code=500), cause=cause)
        self.assertIs(err.cause, cause)


if __name__ == "__main__":
    unittest.main()
