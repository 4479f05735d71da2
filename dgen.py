r'''
.------..------..------..------.
|d.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| (__) || :\/: || :\/: || ()() |
| '--'d|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'
'''

import numpy as np
from faker import Faker
from memofold import from_iterable, Sequence
from typing import Any, Dict, List, Optional


class Generator:
    """schema interpreter for sequence elements."""

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
            self._rng = np.random.default_rng(seed)
        else:
            self._rng = np.random.default_rng()

    def _resolve_faker_method(self, method_name: str, kwargs: Dict = None) -> Any:
        try:
            method = getattr(self._fake, method_name)
        except AttributeError:
            raise ValueError(f"faker has no provider '{method_name}'")
        return method(**(kwargs or {}))

    def _resolve_provider(self, config: Dict) -> Any:
        provider = config["_gen_provider"]
        if provider == "choice":
            # convert numpy's choice result to a native python type
            choice_result = self._rng.choice(config["from"])
            return choice_result.item() if hasattr(choice_result, 'item') else choice_result

        elif provider == "int":
            return int(self._rng.integers(config.get("low", 0), config.get("high", 100), endpoint=True))

        elif provider == "float":
            return float(self._rng.uniform(config.get("low", 0.0), config.get("high", 1.0)))

        elif provider == "literal":
            if "value" not in config:
                raise ValueError("_gen_provider 'literal' requires a 'value' key.")
            return config["value"]

        else:
            raise ValueError(f"unknown _gen_provider: '{provider}'")

    def create(self, schema: Any) -> Any:
        if isinstance(schema, dict):
            if "_gen_provider" in schema:
                return self._resolve_provider(schema)
            return {k: self.create(v) for k, v in schema.items()}

        if isinstance(schema, str):
            if hasattr(self._fake, schema):
                return self._resolve_faker_method(schema)
            return schema  # otherwise, it's a literal string.

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._resolve_faker_method(schema[0], schema[1])

        return schema


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> Sequence:
        return from_iterable([self._generator.create(self._schema) for _ in range(count)])

    def take_lengths(self, lengths: List[int]) -> List[Sequence]:
        """one sequence per requested length, all from the same generator"""
        return [self.take(n) for n in lengths]


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)


def ints(count: int, low: int = -1000, high: int = 1000, seed: Optional[int] = None) -> Sequence:
    """a sequence of uniformly drawn ints in [low, high]"""
    rng = np.random.default_rng(seed)
    return from_iterable(rng.integers(low, high, size=count, endpoint=True).tolist())
