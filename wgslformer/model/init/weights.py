# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Deterministic weight initialization for WGSLFormer.

All initialization uses a single torch.Generator seeded from the config,
so two models built from the same config hold identical values no matter
what the global RNG has been doing.

  - LayerNorm: gamma = 1, beta = 0
  - everything else (embeddings, projection weights and biases):
    Uniform(-init_range, init_range)
"""

import torch
import torch.nn as nn

from wgslformer.model.layers.norm import LayerNorm


def init_weights(module: nn.Module, seed: int, init_range: float = 0.1) -> None:
    """
    Initialize every parameter in ``module`` in place.

    Parameters are visited in registration order, which is fixed by the
    module tree, so the generator hands out the same values every time.

    Args:
        module: Root module to initialize.
        seed: Seed for the dedicated Generator.
        init_range: Half-width of the uniform interval.
    """
    generator = torch.Generator()
    generator.manual_seed(seed)

    norm_params: set[int] = set()
    for submodule in module.modules():
        if isinstance(submodule, LayerNorm):
            with torch.no_grad():
                submodule.gamma.fill_(1.0)
                submodule.beta.zero_()
            norm_params.update((id(submodule.gamma), id(submodule.beta)))

    with torch.no_grad():
        for param in module.parameters():
            if id(param) in norm_params:
                continue
            param.uniform_(-init_range, init_range, generator=generator)
