# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Tests for Linear, LayerNorm, FeedForward and the positional table."""

import math

import torch

from wgslformer.model.layers import FeedForward, LayerNorm, Linear, PositionalEncoding, sinusoidal_table


class TestLinear:
    def test_weight_layout_is_in_by_out(self) -> None:
        layer = Linear(3, 5)
        assert layer.weight.shape == (3, 5)
        assert layer.bias.shape == (5,)

    def test_computes_x_w_plus_b(self) -> None:
        layer = Linear(2, 2)
        with torch.no_grad():
            layer.weight.copy_(torch.tensor([[1.0, 2.0], [3.0, 4.0]]))
            layer.bias.copy_(torch.tensor([0.5, -0.5]))
        out = layer(torch.tensor([[1.0, 1.0]]))
        assert torch.allclose(out, torch.tensor([[4.5, 5.5]]))


class TestLayerNorm:
    def test_normalized_rows_have_zero_mean_unit_variance(self) -> None:
        norm = LayerNorm(32)
        x = torch.randn(6, 32) * 5 + 3
        out = norm(x)

        assert torch.allclose(out.mean(dim=-1), torch.zeros(6), atol=1e-5)
        variance = out.var(dim=-1, unbiased=False)
        assert torch.allclose(variance, torch.ones(6), atol=1e-3)

    def test_scale_and_shift_are_applied(self) -> None:
        norm = LayerNorm(4)
        with torch.no_grad():
            norm.gamma.fill_(2.0)
            norm.beta.fill_(1.0)
        x = torch.tensor([[1.0, 2.0, 3.0, 4.0]])
        assert torch.allclose(norm(x), norm.normalize(x) * 2.0 + 1.0)

    def test_constant_row_stays_finite(self) -> None:
        out = LayerNorm(8)(torch.full((1, 8), 3.0))
        assert torch.isfinite(out).all()
        assert torch.allclose(out, torch.zeros(1, 8))

    def test_rows_are_independent(self) -> None:
        norm = LayerNorm(4)
        x = torch.randn(3, 4)
        single = norm(x[1:2])
        assert torch.allclose(norm(x)[1:2], single)


class TestFeedForward:
    def test_shape(self) -> None:
        ffn = FeedForward(8, 32)
        torch.nn.init.uniform_(ffn.linear1.weight, -0.1, 0.1)
        torch.nn.init.zeros_(ffn.linear1.bias)
        torch.nn.init.uniform_(ffn.linear2.weight, -0.1, 0.1)
        torch.nn.init.zeros_(ffn.linear2.bias)
        assert ffn(torch.randn(5, 8)).shape == (5, 8)

    def test_relu_clamps_hidden_negatives(self) -> None:
        ffn = FeedForward(1, 1)
        with torch.no_grad():
            ffn.linear1.weight.fill_(1.0)
            ffn.linear1.bias.zero_()
            ffn.linear2.weight.fill_(1.0)
            ffn.linear2.bias.zero_()
        out = ffn(torch.tensor([[-3.0], [2.0]]))
        assert torch.equal(out, torch.tensor([[0.0], [2.0]]))

    def test_parameter_count(self) -> None:
        ffn = FeedForward(8, 32)
        assert sum(p.numel() for p in ffn.parameters()) == 8 * 32 + 32 + 32 * 8 + 8


class TestPositionalTable:
    def test_shape(self) -> None:
        assert sinusoidal_table(10, 6).shape == (10, 6)

    def test_first_row_alternates_zero_and_one(self) -> None:
        row = sinusoidal_table(4, 6)[0]
        assert torch.allclose(row, torch.tensor([0.0, 1.0, 0.0, 1.0, 0.0, 1.0]))

    def test_matches_closed_form(self) -> None:
        d_model = 8
        table = sinusoidal_table(20, d_model)
        for pos in (1, 7, 19):
            for i in range(d_model):
                angle = pos / (10000 ** ((2 * (i // 2)) / d_model))
                expected = math.sin(angle) if i % 2 == 0 else math.cos(angle)
                assert abs(table[pos, i].item() - expected) < 1e-5

    def test_odd_width(self) -> None:
        table = sinusoidal_table(3, 5)
        assert table.shape == (3, 5)
        assert abs(table[1, 4].item() - math.sin(1 / (10000 ** (4 / 5)))) < 1e-6

    def test_rows_wrap_modulo_table_length(self) -> None:
        encoding = PositionalEncoding(max_seq_len=4, d_model=6)
        rows = encoding.rows(6)
        assert torch.equal(rows[4], encoding.table[0])
        assert torch.equal(rows[5], encoding.table[1])

    def test_table_is_a_buffer_not_a_parameter(self) -> None:
        encoding = PositionalEncoding(max_seq_len=4, d_model=6)
        assert list(encoding.parameters()) == []

    def test_forward_adds_rows(self) -> None:
        encoding = PositionalEncoding(max_seq_len=4, d_model=6)
        x = torch.zeros(3, 6)
        assert torch.equal(encoding(x), encoding.table[:3])
