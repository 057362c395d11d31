"""Tests for the demo command line."""

import json
import sys

from sumcheck.__main__ import build_instance, main
from sumcheck.protocol.proof import load_proof_from_json


class TestDemo:

    def test_instance_shape(self) -> None:
        poly = build_instance(3, 2, seed=0)
        assert poly.num_vars() == 3
        assert poly.degree() == 3
        assert len(poly.operands) == 4

    def test_main_writes_proof(self, tmp_path, monkeypatch) -> None:
        out = tmp_path / "proof.json"
        monkeypatch.setattr(sys, "argv", ["sumcheck", "--num-vars", "3", "--output", str(out)])
        assert main() == 0
        assert load_proof_from_json(str(out)).num_rounds == 3

    def test_main_with_config(self, tmp_path, monkeypatch) -> None:
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"maxDegree": 3, "domainLabel": "demo"}))
        monkeypatch.setattr(sys, "argv", ["sumcheck", "--config", str(config), "--threads", "1"])
        assert main() == 0

    def test_main_rejects_bad_args(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "argv", ["sumcheck", "--num-vars", "0"])
        assert main() == 1

    def test_main_rejects_zero_threads(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "argv", ["sumcheck", "--threads", "0"])
        assert main() == 1
