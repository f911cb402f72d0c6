import logging
import unittest

from src.venum.infrastructure._config import (
    TensorConfig,
    config_context,
    get_config,
    set_config,
)


class TestTensorConfigFromEnv(unittest.TestCase):
    def test_defaults_when_unset(self):
        cfg = TensorConfig.from_env({})
        self.assertTrue(cfg.fast_path)
        self.assertIsNone(cfg.materialization_warning_threshold)

    def test_fast_path_flag(self):
        self.assertFalse(TensorConfig.from_env({"VENUM_FAST_PATH": "0"}).fast_path)
        self.assertFalse(TensorConfig.from_env({"VENUM_FAST_PATH": "False"}).fast_path)
        self.assertTrue(TensorConfig.from_env({"VENUM_FAST_PATH": "yes"}).fast_path)

    def test_invalid_fast_path_flag(self):
        with self.assertRaises(ValueError):
            TensorConfig.from_env({"VENUM_FAST_PATH": "maybe"})

    def test_threshold(self):
        cfg = TensorConfig.from_env({"VENUM_MATERIALIZATION_WARNING_THRESHOLD": "100"})
        self.assertEqual(cfg.materialization_warning_threshold, 100)

    def test_invalid_threshold(self):
        with self.assertRaises(ValueError):
            TensorConfig.from_env({"VENUM_MATERIALIZATION_WARNING_THRESHOLD": "lots"})
        with self.assertRaises(ValueError):
            TensorConfig(materialization_warning_threshold=-1)


class TestRuntimeConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._saved = get_config()

    def tearDown(self) -> None:
        set_config(
            fast_path=self._saved.fast_path,
            materialization_warning_threshold=self._saved.materialization_warning_threshold,
        )

    def test_set_config_returns_previous(self):
        before = get_config()
        previous = set_config(fast_path=not before.fast_path)
        self.assertEqual(previous, before)
        self.assertEqual(get_config().fast_path, not before.fast_path)

    def test_set_config_rejects_unknown_keys(self):
        with self.assertRaises(TypeError):
            set_config(turbo=True)

    def test_config_context_restores(self):
        before = get_config()
        with config_context(materialization_warning_threshold=5) as cfg:
            self.assertEqual(cfg.materialization_warning_threshold, 5)
            self.assertEqual(get_config().materialization_warning_threshold, 5)
        self.assertEqual(get_config(), before)

    def test_config_context_restores_after_error(self):
        before = get_config()
        with self.assertRaises(RuntimeError):
            with config_context(fast_path=False):
                raise RuntimeError("boom")
        self.assertEqual(get_config(), before)

    def test_changes_are_logged(self):
        with self.assertLogs("src.venum.infrastructure._config", level=logging.DEBUG):
            set_config(fast_path=True)


if __name__ == "__main__":
    unittest.main()
