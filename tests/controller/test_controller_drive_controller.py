import json
import unittest
from unittest.mock import Mock, patch

from filedock.controller import GoogleDriveController, escape_query_literal
from filedock.errors import (
    ApiError,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
)


def _http_error(status: int, reason: str, body=None):
    from googleapiclient.errors import HttpError

    resp = Mock()
    resp.status = status
    resp.reason = reason
    content = json.dumps(body or {}).encode("utf-8")
    return HttpError(resp=resp, content=content)


class FakeDownloader:
    """Stand-in for MediaIoBaseDownload that writes fixed chunks."""

    chunks: list[bytes] = []

    def __init__(self, fd, request) -> None:
        self._fd = fd
        self._pending = list(self.chunks)

    def next_chunk(self):
        self._fd.write(self._pending.pop(0))
        return None, not self._pending


class TestEscapeQueryLiteral(unittest.TestCase):
    def test_escapes_quotes_and_backslashes(self) -> None:
        self.assertEqual(escape_query_literal("plain"), "plain")
        self.assertEqual(escape_query_literal("Bob's"), "Bob\\'s")
        self.assertEqual(escape_query_literal("a\\b"), "a\\\\b")
        self.assertEqual(escape_query_literal("\\'"), "\\\\\\'")


class TestDriveControllerMocked(unittest.TestCase):
    def _mock_service_with_list(self, files_payload, next_token=None):
        service = Mock()
        files_resource = Mock()
        request = Mock()

        service.files.return_value = files_resource
        request.execute.return_value = {
            "files": files_payload,
            "nextPageToken": next_token,
        }
        files_resource.list.return_value = request
        return service, files_resource, request

    def test_constructor_requires_token(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            GoogleDriveController(Mock(), "")

    def test_list_children_defaults_to_root(self) -> None:
        service, files_resource, _ = self._mock_service_with_list(
            [{"id": "F1", "name": "Docs", "mimeType": "application/vnd.google-apps.folder"}],
            next_token="next-1",
        )
        controller = GoogleDriveController.from_service(service)

        page = controller.list_children()

        kwargs = files_resource.list.call_args.kwargs
        self.assertEqual(kwargs["q"], "trashed=false and 'root' in parents")
        self.assertEqual(kwargs["orderBy"], "folder,name")
        self.assertEqual(kwargs["pageSize"], 50)
        self.assertIsNone(kwargs["pageToken"])
        self.assertEqual(page.next_page_token, "next-1")
        self.assertEqual(page.files[0].id, "F1")
        self.assertTrue(page.files[0].is_folder)

    def test_list_children_of_folder_with_page_token(self) -> None:
        service, files_resource, _ = self._mock_service_with_list([])
        controller = GoogleDriveController.from_service(service)

        page = controller.list_children("P1", page_token="tok")

        kwargs = files_resource.list.call_args.kwargs
        self.assertIn("'P1' in parents", kwargs["q"])
        self.assertEqual(kwargs["pageToken"], "tok")
        self.assertEqual(page.files, [])
        self.assertIsNone(page.next_page_token)

    def test_search_escapes_query(self) -> None:
        service, files_resource, _ = self._mock_service_with_list([])
        controller = GoogleDriveController.from_service(service)

        controller.search_by_name("Bob's notes")

        kwargs = files_resource.list.call_args.kwargs
        self.assertEqual(kwargs["q"], "trashed=false and name contains 'Bob\\'s notes'")
        self.assertEqual(kwargs["orderBy"], "name")

    def test_get_maps_http_404_to_not_found(self) -> None:
        service = Mock()
        req = Mock()
        service.files.return_value.get.return_value = req
        req.execute.side_effect = _http_error(404, "Not Found")

        controller = GoogleDriveController.from_service(service)

        with self.assertRaises(NotFoundError) as ctx:
            controller.get("X")
        self.assertEqual(ctx.exception.details["status_code"], 404)

    def test_http_status_mapping(self) -> None:
        cases = [
            (429, "Too Many Requests", {}, RateLimitError),
            (403, "Forbidden", {}, PermissionError),
            (
                403,
                "Forbidden",
                {"error": {"message": "quota", "errors": [{"reason": "dailyLimitExceeded"}]}},
                QuotaExceededError,
            ),
            (500, "Internal Server Error", {}, ApiError),
        ]
        for status, reason, body, expected in cases:
            with self.subTest(status=status, expected=expected.__name__):
                service = Mock()
                req = Mock()
                service.files.return_value.get.return_value = req
                req.execute.side_effect = _http_error(status, reason, body)

                controller = GoogleDriveController.from_service(service)
                with self.assertRaises(expected):
                    controller.get("X")
                self.assertEqual(req.execute.call_count, 1)

    def test_os_error_maps_to_network_error(self) -> None:
        service = Mock()
        service.files.return_value.get.return_value.execute.side_effect = OSError("reset")

        controller = GoogleDriveController.from_service(service)
        with self.assertRaises(NetworkError):
            controller.get("X")

    def test_download_media_collects_chunks(self) -> None:
        service = Mock()
        controller = GoogleDriveController.from_service(service)
        FakeDownloader.chunks = [b"hello ", b"world"]

        with patch("googleapiclient.http.MediaIoBaseDownload", FakeDownloader):
            data = controller.download_media("F1")

        service.files.return_value.get_media.assert_called_once_with(fileId="F1")
        self.assertEqual(data, b"hello world")

    def test_export_passes_mime_type(self) -> None:
        service = Mock()
        controller = GoogleDriveController.from_service(service)
        FakeDownloader.chunks = [b"%PDF"]

        with patch("googleapiclient.http.MediaIoBaseDownload", FakeDownloader):
            data = controller.export("D1", "application/pdf")

        service.files.return_value.export_media.assert_called_once_with(
            fileId="D1", mimeType="application/pdf"
        )
        self.assertEqual(data, b"%PDF")


if __name__ == "__main__":
    unittest.main()
