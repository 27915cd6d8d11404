import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import requests

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))

from addin_test_server import client as client_module  # noqa: E402
from addin_test_server.client import TestServerClient  # noqa: E402
from addin_test_server.config import ServerConfig  # noqa: E402
from addin_test_server.test_server import TestServer  # noqa: E402


class ClientRetryTests(unittest.TestCase):
    def setUp(self):
        self.session = mock.Mock()
        self.client = TestServerClient(4201, session=self.session)
        patcher = mock.patch.object(client_module.time, "sleep")
        self.mock_sleep = patcher.start()
        self.addCleanup(patcher.stop)

    def test_ssl_errors_are_not_retried(self):
        self.session.request.side_effect = requests.exceptions.SSLError("certificate verify failed")
        with self.assertRaises(requests.exceptions.SSLError):
            self.client.ping()
        self.assertEqual(self.session.request.call_count, 1)
        self.mock_sleep.assert_not_called()

    def test_connection_errors_are_retried(self):
        ok = mock.Mock(status_code=200, text="linux")
        self.session.request.side_effect = [requests.ConnectionError("refused"), ok]
        self.assertEqual(self.client.ping(), "linux")
        self.assertEqual(self.session.request.call_count, 2)
        self.mock_sleep.assert_called_once_with(0.5)

    def test_post_results_encodes_data_param(self):
        self.session.request.return_value = mock.Mock(status_code=200, text="200")
        self.client.post_results({"x": 5})
        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ("POST", "https://localhost:4201/results"))
        self.assertEqual(kwargs["params"], {"data": '{"x": 5}'})


class ForServerVerifyTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)
        self.ca_path = Path(self.tmpdir.name) / "ca.crt"

    def _server(self):
        return TestServer(4201, config=ServerConfig(ca_cert_path=self.ca_path))

    def test_trusts_dev_ca_when_present(self):
        self.ca_path.write_text("dev ca", encoding="utf-8")
        client = TestServerClient.for_server(self._server())
        self.assertEqual(client.verify, str(self.ca_path))
        self.assertEqual(client.base_url, "https://localhost:4201")

    def test_falls_back_to_default_trust_store(self):
        self.assertTrue(TestServerClient.for_server(self._server()).verify)

    def test_relaxed_server_disables_verification(self):
        self.ca_path.write_text("dev ca", encoding="utf-8")
        server = self._server()
        server._verify_tls = False
        self.assertFalse(TestServerClient.for_server(server).verify)

    def test_explicit_verify_wins(self):
        client = TestServerClient.for_server(self._server(), verify="/etc/ssl/custom.pem")
        self.assertEqual(client.verify, "/etc/ssl/custom.pem")


if __name__ == "__main__":
    unittest.main()
