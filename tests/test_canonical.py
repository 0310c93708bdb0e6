import unittest
from decimal import Decimal

from paramsign.canonical import build_canonical_string, coerce_value, filter_params


class CoerceValueTest(unittest.TestCase):
    def test_scalars(self) -> None:
        cases = [
            (123, "123"),
            (-7, "-7"),
            (123.456, "123.456000"),
            (100.5, "100.500000"),
            ("test", "test"),
            ("", ""),
            (True, "true"),
            (False, "false"),
            (None, ""),
        ]
        for value, expected in cases:
            self.assertEqual(coerce_value(value), expected, value)

    def test_structured_values_are_compact_json(self) -> None:
        self.assertEqual(coerce_value(["a", "b"]), '["a","b"]')
        self.assertEqual(coerce_value({"b": 2, "a": 1}), '{"a":1,"b":2}')
        self.assertEqual(coerce_value({"z": [1, {"y": True, "x": None}]}), '{"z":[1,{"x":null,"y":true}]}')
        self.assertEqual(coerce_value(("a", 1)), '["a",1]')
        self.assertEqual(coerce_value(["é"]), '["é"]')

    def test_structured_strings_escape_html_characters(self) -> None:
        self.assertEqual(coerce_value(["a&b", "<x>"]), '["a\\u0026b","\\u003cx\\u003e"]')
        self.assertEqual(coerce_value({"k&": "\u2028\u2029"}), '{"k\\u0026":"\\u2028\\u2029"}')

    def test_structured_floats_use_shortest_form(self) -> None:
        self.assertEqual(coerce_value({"p": [1.0, 2.5]}), '{"p":[1,2.5]}')
        cases = [
            (0.0, "0"),
            (-0.0, "-0"),
            (123456789.0, "123456789"),
            (0.00001, "0.00001"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1e-7, "1e-7"),
            (1.5e-10, "1.5e-10"),
            (-2.5e22, "-2.5e+22"),
        ]
        for value, expected in cases:
            self.assertEqual(coerce_value([value]), f"[{expected}]", value)

    def test_structured_integer_keys_sort_as_strings(self) -> None:
        self.assertEqual(coerce_value({10: "a", 2: "b", "1": "c"}), '{"1":"c","10":"a","2":"b"}')

    def test_non_finite_floats(self) -> None:
        self.assertEqual(coerce_value(float("nan")), "NaN")
        self.assertEqual(coerce_value(float("inf")), "+Inf")
        self.assertEqual(coerce_value(float("-inf")), "-Inf")

    def test_unserializable_falls_back_to_str(self) -> None:
        self.assertEqual(coerce_value(Decimal("1.5")), "1.5")
        self.assertEqual(coerce_value({1.5}), "{1.5}")


class CanonicalStringTest(unittest.TestCase):
    def test_sorted_pairs_with_secret(self) -> None:
        params = {"name": "test", "id": 123, "amount": 100.50}
        self.assertEqual(
            build_canonical_string(params, "testSecret"),
            "amount=100.500000&id=123&name=test&key=testSecret",
        )

    def test_no_secret_suffix_without_secret(self) -> None:
        self.assertEqual(build_canonical_string({"b": None, "a": False}), "a=false&b=")

    def test_filter_params_copies(self) -> None:
        params = {"a": 1, "sign": "x"}
        working = filter_params(params, ["sign", "missing"])
        self.assertEqual(working, {"a": 1})
        self.assertEqual(params, {"a": 1, "sign": "x"})


if __name__ == "__main__":
    unittest.main()
