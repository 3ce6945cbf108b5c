import unittest

import numpy as np


class TestUnbalanced1Dim(unittest.TestCase):
    def test_balanced_cost_learns_identity(self):
        # Noisy, unbalanced training data:
        # 1) equal cost per sample -> always guessing the majority class (1)
        #    minimizes the total cost
        # 2) equal cost per class -> the identity in == label is learned
        from balnet.network import Network
        from balnet.synth import make_unbalanced_1dim, make_balanced_1dim_test
        from balnet.target_cost import create_balanced_target_cost

        p, p0, p1 = 0.9, 0.6, 0.9
        n = 4000
        rng = np.random.default_rng(1234)
        X, y = make_unbalanced_1dim(n, p=p, p0=p0, p1=p1, rng=rng)

        p_label1 = p0 * (1 - p) + p1 * p
        n_label1 = int(y.sum())
        self.assertLess(abs(n_label1 / n - p_label1), 0.05)

        balanced_cost = create_balanced_target_cost(y)

        net_equal_sample_cost = Network.fully_connected([1, 10, 2], lr=0.05, seed=0)
        net_equal_class_cost = Network.fully_connected([1, 10, 2], lr=0.05, seed=0)
        net_equal_sample_cost.train(X, y, batch_size=50, epochs=40, seed=0, target_cost=None)
        net_equal_class_cost.train(X, y, batch_size=50, epochs=40, seed=0, target_cost=balanced_cost)

        Xte, yte = make_balanced_1dim_test(1000, rng=rng)
        errors_equal_sample_cost = 0
        errors_equal_class_cost = 0
        for x, expected in zip(Xte, yte):
            a = net_equal_sample_cost.predict_label(x)
            b = net_equal_class_cost.predict_label(x)
            self.assertEqual(a, 1)
            errors_equal_sample_cost += int(a != expected)
            errors_equal_class_cost += int(b != expected)

        self.assertGreaterEqual(errors_equal_sample_cost, 0.25 * len(yte))
        self.assertEqual(errors_equal_class_cost, 0)


class TestUnbalancedXor(unittest.TestCase):
    def test_balanced_cost_learns_xor(self):
        # Noisy xor with 90% of labels in class 1: uniform cost settles on
        # the majority class, balanced cost recovers in0 xor in1
        from balnet.network import Network
        from balnet.synth import make_unbalanced_xor, make_balanced_xor_test
        from balnet.target_cost import create_balanced_target_cost

        n = 2000
        rng = np.random.default_rng(1234)
        X, y = make_unbalanced_xor(n, p=0.9, noise=0.25, rng=rng)
        self.assertLess(abs(float(y.mean()) - 0.9), 0.05)

        balanced_cost = create_balanced_target_cost(y)

        net_equal_sample_cost = Network.fully_connected([2, 10, 2], lr=0.05, seed=0)
        net_equal_class_cost = Network.fully_connected([2, 10, 2], lr=0.05, seed=0)
        net_equal_sample_cost.train(X, y, batch_size=50, epochs=40, seed=0, target_cost=None)
        net_equal_class_cost.train(X, y, batch_size=50, epochs=40, seed=0, target_cost=balanced_cost)

        Xte, yte = make_balanced_xor_test(1000, rng=rng)
        errors_equal_sample_cost = 0
        errors_equal_class_cost = 0
        for x, expected in zip(Xte, yte):
            a = net_equal_sample_cost.predict_label(x)
            b = net_equal_class_cost.predict_label(x)
            self.assertEqual(a, 1)
            errors_equal_sample_cost += int(a != expected)
            errors_equal_class_cost += int(b != expected)

        self.assertGreaterEqual(errors_equal_sample_cost, 0.25 * len(yte))
        self.assertEqual(errors_equal_class_cost, 0)


if __name__ == "__main__":
    unittest.main()
