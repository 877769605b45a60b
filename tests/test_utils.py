import json

import pytest

import curesurv.utils as csu


def test_numba_defaults():
    assert not csu.numba_defaults_kwargs.fastmath
    assert not csu.numba_defaults_kwargs.parallel

    assert csu.numba_defaults(cache=True)["cache"]
    assert "cache" in dict(csu.numba_defaults)


def test_numerical_defaults(monkeypatch):
    opts = csu.numerical_defaults
    assert opts.maxiter == 200
    assert opts["bracket_factor"] == 2.0
    assert opts(xtol=1e-6)["xtol"] == 1e-6
    assert opts.xtol == 1e-12

    monkeypatch.setenv("CURESURV_TAIL_TOL", "1e-3")
    monkeypatch.setenv("CURESURV_LIMIT", "50")
    fresh = csu.NumericalDefaults()
    assert fresh.tail_tol == 1e-3
    assert fresh.limit == 50


def test_getenv(monkeypatch):
    monkeypatch.setenv("CURESURV_TEST_FLAG", "True")
    assert csu.getenv_bool("CURESURV_TEST_FLAG")
    monkeypatch.setenv("CURESURV_TEST_FLAG", "no")
    assert not csu.getenv_bool("CURESURV_TEST_FLAG", default=True)
    monkeypatch.delenv("CURESURV_TEST_FLAG")
    assert csu.getenv_bool("CURESURV_TEST_FLAG", default=True)
    assert csu.getenv_float("CURESURV_TEST_FLOAT", 2.5) == 2.5


def test_load_dict(tmp_path):
    opts = {"xtol": 1e-10, "maxiter": 50}

    fjson = tmp_path / "solver.json"
    fjson.write_text(json.dumps(opts))
    assert csu.load_dict(fjson) == opts

    fyaml = tmp_path / "solver.yml"
    fyaml.write_text("xtol: 1.0e-10\nmaxiter: 50\n")
    assert csu.load_dict(str(fyaml)) == opts

    ftxt = tmp_path / "solver.txt"
    ftxt.write_text("xtol = 1e-10")
    with pytest.raises(NotImplementedError):
        csu.load_dict(ftxt)
    assert csu.load_dict(ftxt.with_suffix(".txt"), ftype="yaml") == "xtol = 1e-10"


def test_numerical_defaults_from_yaml(tmp_path):
    opts = csu.NumericalDefaults()
    fyaml = tmp_path / "solver.yaml"
    # no dot in the mantissa: YAML loads these as strings
    fyaml.write_text("xtol: 1e-10\nlimit: 5e1\nbracket_max: 1e6\n")
    loaded = csu.load_dict(fyaml)
    assert loaded["xtol"] == "1e-10"

    opts.update(loaded)
    assert opts.xtol == 1e-10
    assert isinstance(opts.xtol, float)
    assert opts.limit == 50
    assert isinstance(opts.limit, int)
    assert opts["bracket_max"] == 1e6

    with pytest.raises(KeyError):
        opts["xtoll"] = 1e-8
    with pytest.raises(ValueError):
        opts["xtol"] = "tight"
