import json
import tempfile
import unittest
from pathlib import Path

import httpx

from filedock.api import FileDockClient
from filedock.errors import InvalidArgumentError, NetworkError
from filedock.models import FolderNode, UploadFile


def make_client(handler, **kwargs) -> FileDockClient:
    return FileDockClient(
        base_url="http://files.test/",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestFileDockClientDrive(unittest.IsolatedAsyncioTestCase):
    async def test_get_auth_url_sends_session_token(self) -> None:
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json={"authUrl": "https://accounts.google.com/x"})

        client = make_client(handler, session_token="sess")
        self.assertEqual(await client.get_auth_url(), "https://accounts.google.com/x")
        self.assertEqual(seen, {"path": "/api/google-drive/auth-url", "auth": "Bearer sess"})

    async def test_list_drive_files(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.params["access_token"], "tok")
            self.assertEqual(request.url.params["folder_id"], "F1")
            return httpx.Response(
                200,
                json={
                    "files": [
                        {
                            "id": "a",
                            "name": "Docs",
                            "mimeType": "application/vnd.google-apps.folder",
                            "modifiedTime": "2024-01-01T00:00:00.000Z",
                        }
                    ]
                },
            )

        files = await make_client(handler).list_drive_files("tok", "F1")
        self.assertEqual(len(files), 1)
        self.assertTrue(files[0].is_folder)
        self.assertEqual(files[0].modified_time.year, 2024)

    async def test_list_root_omits_folder_id(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertNotIn("folder_id", request.url.params)
            return httpx.Response(200, json={"files": []})

        self.assertEqual(await make_client(handler).list_drive_files("tok"), [])

    async def test_search_drive_files(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/api/google-drive/search")
            self.assertEqual(request.url.params["q"], "Bob's")
            return httpx.Response(200, json={"files": []})

        self.assertEqual(await make_client(handler).search_drive_files("tok", "Bob's"), [])

    async def test_import_drive_files(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.method, "POST")
            body = json.loads(request.content)
            self.assertEqual(body, {"access_token": "tok", "file_ids": ["a", "b"]})
            return httpx.Response(
                200, json={"imported": 1, "failed": 1, "errors": ["Failed to download file b"]}
            )

        summary = await make_client(handler).import_drive_files("tok", ["a", "b"])
        self.assertEqual(summary.imported, 1)
        self.assertEqual(summary.failed, 1)
        self.assertEqual(summary.errors, ["Failed to download file b"])


class TestFileDockClientErrors(unittest.IsolatedAsyncioTestCase):
    async def test_error_body_message(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(401, json={"error": "Failed to list Google Drive files"})

        with self.assertRaises(NetworkError) as ctx:
            await make_client(handler).list_drive_files("expired")
        self.assertEqual(str(ctx.exception), "Failed to list Google Drive files")
        self.assertEqual(ctx.exception.details["status_code"], 401)

    async def test_plain_text_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, text="boom")

        with self.assertRaises(NetworkError) as ctx:
            await make_client(handler).get_auth_url()
        self.assertEqual(str(ctx.exception), "500: boom")

    async def test_transport_failure(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with self.assertRaises(NetworkError) as ctx:
            await make_client(handler).get_auth_url()
        self.assertIsInstance(ctx.exception.cause, httpx.ConnectError)

    async def test_non_json_success_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="OK")

        files = [UploadFile(name="a.txt", relative_path="", source=b"x")]
        with self.assertRaises(NetworkError) as ctx:
            await make_client(handler).upload_files(files)
        self.assertEqual(ctx.exception.details["status_code"], 200)
        self.assertEqual(ctx.exception.details["body"], "OK")

    async def test_empty_success_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200)

        client = make_client(handler)
        self.assertEqual(await client.list_drive_files("tok"), [])
        self.assertEqual(await client.search_drive_files("tok", "q"), [])
        summary = await client.import_drive_files("tok", ["a"])
        self.assertEqual((summary.imported, summary.failed), (0, 0))
        with self.assertRaises(NetworkError):
            await client.get_auth_url()


class TestFileDockClientUploads(unittest.IsolatedAsyncioTestCase):
    async def test_upload_files_multipart(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/api/files/upload-multiple")
            self.assertIn(b'name="files"; filename="a.txt"', request.content)
            self.assertIn(b"hello", request.content)
            return httpx.Response(200, json={"ok": True})

        files = [UploadFile(name="a.txt", relative_path="", source=b"hello")]
        self.assertEqual(await make_client(handler).upload_files(files), {"ok": True})

    async def test_upload_folder_sends_structure(self) -> None:
        structure = FolderNode()
        structure.child("docs")

        def handler(request: httpx.Request) -> httpx.Response:
            self.assertEqual(request.url.path, "/api/folders/upload")
            self.assertIn(b'name="folderStructure"', request.content)
            self.assertIn(json.dumps(structure.to_dict()).encode("utf-8"), request.content)
            return httpx.Response(204)

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "b.txt"
            path.write_bytes(b"from disk")
            files = [UploadFile(name="b.txt", relative_path="docs/b.txt", source=path)]
            self.assertIsNone(await make_client(handler).upload_folder(files, structure))

    async def test_unreadable_source_is_rejected(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        files = [UploadFile(name="a", relative_path="", source=object())]
        with self.assertRaises(InvalidArgumentError):
            await make_client(handler).upload_files(files)


if __name__ == "__main__":
    unittest.main()
