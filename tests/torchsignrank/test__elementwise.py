import torch

from torchsignrank._elementwise import as_tensors, map_elementwise
from torchsignrank.probability._signrank._outcome import (
    Status,
    domain_error,
    ok,
)


def _halve_positive(a):
    if a < 0:
        return domain_error()
    return ok(a / 2)


class TestAsTensors:
    def test_scalars_default_to_float64(self):
        a, b = as_tensors(1, 2.5)
        assert a.dtype == b.dtype == torch.float64

    def test_scalars_follow_first_tensor(self):
        x = torch.tensor([1.0], dtype=torch.float32)
        a, b = as_tensors(2.0, x)
        assert a.dtype == torch.float32
        assert b is x

    def test_integer_tensor_keeps_dtype(self):
        x = torch.tensor([1, 2])
        a, b = as_tensors(x, 3.0)
        assert a.dtype == torch.int64
        assert b.dtype == torch.float64


class TestMapElementwise:
    def test_broadcast_shape(self):
        values, statuses = map_elementwise(
            lambda a, b: ok(a + b),
            torch.tensor([[1.0], [2.0]], dtype=torch.float64),
            torch.tensor([10.0, 20.0, 30.0], dtype=torch.float64),
        )
        assert values.shape == (2, 3)
        torch.testing.assert_close(
            values,
            torch.tensor(
                [[11.0, 21.0, 31.0], [12.0, 22.0, 32.0]], dtype=torch.float64
            ),
        )
        assert statuses == [Status.OK] * 6

    def test_statuses_row_major(self):
        values, statuses = map_elementwise(
            _halve_positive, torch.tensor([2.0, -1.0, 4.0])
        )
        assert statuses == [Status.OK, Status.DOMAIN_ERROR, Status.OK]
        assert values[1].isnan()
        assert values[2].item() == 2.0

    def test_dtype_promotion(self):
        values, _ = map_elementwise(
            lambda a, b: ok(a * b),
            torch.tensor([1.0], dtype=torch.float32),
            torch.tensor([2.0], dtype=torch.float64),
        )
        assert values.dtype == torch.float64

    def test_integer_inputs_give_float64(self):
        values, _ = map_elementwise(lambda a: ok(a), torch.tensor([1, 2]))
        assert values.dtype == torch.float64

    def test_explicit_dtype(self):
        values, _ = map_elementwise(
            lambda a: ok(a), torch.tensor([1.0]), dtype=torch.float32
        )
        assert values.dtype == torch.float32

    def test_empty(self):
        values, statuses = map_elementwise(
            lambda a: ok(a), torch.empty(0, 3, dtype=torch.float64)
        )
        assert values.shape == (0, 3)
        assert statuses == []
