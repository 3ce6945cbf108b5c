import os, unittest
from types import SimpleNamespace


class TestUnifiedConfig(unittest.TestCase):
    def test_env_overrides_seed_and_device(self):
        from balnet.config import make_config
        os.environ['BALNET_SEED'] = '42'
        os.environ['BALNET_DEVICE'] = 'cpu'
        try:
            args = SimpleNamespace(scenario='xor', epochs=5, batch_size=4, lr=0.1, seed=1, device='auto', balance_w=0.0)
            cfg = make_config(args)
            assert cfg.seed == 42
            assert cfg.device == 'cpu'
            assert cfg.scenario == 'xor'
            assert cfg.balance_w == 0.0
        finally:
            del os.environ['BALNET_SEED']
            del os.environ['BALNET_DEVICE']

    def test_defaults_from_empty_namespace(self):
        from balnet.config import make_config
        cfg = make_config(SimpleNamespace())
        assert cfg.scenario == '1dim'
        assert cfg.balance_w == 1.0
        assert cfg.mlflow is False


if __name__ == '__main__':
    unittest.main()
