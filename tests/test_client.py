import json
import unittest
from urllib.parse import parse_qsl

import httpx

from paramsign.client import SignedClient
from paramsign.signing import SignAlgorithm, SignConfig, SignatureEngine


class SignedClientTest(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = SignatureEngine(SignConfig(secret="testSecret", algorithm=SignAlgorithm.MD5))
        self.requests: list[httpx.Request] = []

    def _client(self, status_code: int = 200) -> SignedClient:
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(status_code, json={"ok": status_code == 200})

        return SignedClient(self.engine, base_url="https://api.example.test", transport=httpx.MockTransport(handler))

    def test_get_signs_query_params(self) -> None:
        params = {"id": 123, "name": "test", "amount": 100.5}
        with self._client() as client:
            response = client.get("/orders", params)
        self.assertEqual(response.json(), {"ok": True})

        sent = dict(self.requests[0].url.params)
        self.assertEqual(sent["amount"], "100.500000")
        self.assertEqual(sent["sign"], self.engine.generate_signature(params))
        # The receiver only sees strings and must reach the same signature.
        self.assertTrue(self.engine.validate_with_signature_in_params(sent))
        self.assertNotIn("sign", params)

    def test_post_form_signs_body(self) -> None:
        data = {"user_id": 12345, "is_vip": True, "items": ["item1", "item2"]}
        with self._client() as client:
            client.post_form("/orders", data)
        request = self.requests[0]
        sent = dict(parse_qsl(request.content.decode("utf-8")))
        self.assertEqual(sent["is_vip"], "true")
        self.assertEqual(sent["items"], '["item1","item2"]')
        self.assertTrue(self.engine.validate_with_signature_in_params(sent))

    def test_post_json_keeps_value_types(self) -> None:
        payload = {"id": 7, "price": 9.99}
        with self._client() as client:
            client.post_json("/orders", payload)
        sent = json.loads(self.requests[0].content)
        self.assertEqual(sent["id"], 7)
        self.assertTrue(self.engine.validate_with_signature_in_params(sent))

    def test_error_status_raises(self) -> None:
        with self._client(status_code=401) as client:
            with self.assertRaises(httpx.HTTPStatusError):
                client.get("/orders", {"id": 1})


if __name__ == "__main__":
    unittest.main()
