import unittest

import numpy as np

from nnfit.activation import algebraic_sigmoid, identity, tanh
from nnfit.core.exception import (
    NetworkNotConfigured, NetworkNotInitialized, TrainingDiverged)
from nnfit.core.network import (
    MAX_ITERATIONS, MIN_ITERATIONS, Network, squared_error)
from nnfit.core.sample_table import Sample, SampleTable


def make_identity_network(**kwargs):
    return Network(neural_function=identity.function,
                   derived_function=identity.derivative, **kwargs)


class TestNetworkConfiguration(unittest.TestCase):

    def test_defaults(self):
        network = Network()

        self.assertIsNone(network.activation)
        self.assertIsNone(network.get_data())
        self.assertEqual(network.unit_count, 1)
        self.assertEqual(network.get_max_iterations(), 500)
        self.assertEqual(network.last_error, 0.0)
        self.assertFalse(network.is_initialized)

    def test_bad_unit_count(self):
        network = Network()

        for count in [0, -3, 1.5]:
            with self.assertRaises(ValueError):
                network.set_neuron_count(count)

        with self.assertRaises(ValueError):
            Network(unit_count=0)

        self.assertEqual(network.unit_count, 1)

    def test_bad_learning_rate(self):
        network = Network()

        for rate in [0, -0.1, float('nan'), 'fast', float('inf')]:
            with self.assertRaises(ValueError):
                network.set_learning_constant(rate)

    def test_bad_max_error(self):
        network = Network()

        with self.assertRaises(ValueError):
            network.set_max_error(-1e-9)

        for max_error in [float('nan'), float('inf'), 'small']:
            with self.assertRaises(ValueError):
                network.set_max_error(max_error)

        network.set_max_error(0)
        self.assertEqual(network.max_error, 0.0)

    def test_bad_ranges(self):
        network = Network()

        with self.assertRaises(ValueError):
            network.set_output_weight_range((1, 0))

        with self.assertRaises(ValueError):
            network.set_input_weight_range((0.5, -0.5))

        with self.assertRaises(ValueError):
            network.set_bias_range((2,))

        with self.assertRaises(ValueError):
            network.set_weight_and_bias_ranges((0, 1), (0, 1), (3, 2))

        nan, inf = float('nan'), float('inf')

        for bad in [(nan, 1.0), (0.0, nan), (0.0, inf), (-inf, 0.0)]:
            with self.assertRaises(ValueError):
                network.set_bias_range(bad)

            with self.assertRaises(ValueError):
                network.set_output_weight_range(bad)

        with self.assertRaises(ValueError):
            Network(input_weight_range=(nan, nan))

        network.set_weight_and_bias_ranges((-1, 1), (0, 0), (2, 3))
        self.assertEqual(network.output_weight_range.min, -1.0)
        self.assertEqual(network.input_weight_range, (0.0, 0.0))
        self.assertEqual(network.bias_range.max, 3.0)

    def test_max_iterations_is_clamped(self):
        network = Network()

        network.set_max_iterations(0)
        self.assertEqual(network.get_max_iterations(), MIN_ITERATIONS)

        network.set_max_iterations(-10)
        self.assertEqual(network.get_max_iterations(), MIN_ITERATIONS)

        network.set_max_iterations(10 * MAX_ITERATIONS)
        self.assertEqual(network.get_max_iterations(), MAX_ITERATIONS)

        network.set_max_iterations(1234)
        self.assertEqual(network.get_max_iterations(), 1234)

        network.set_max_iterations(float('inf'))
        self.assertEqual(network.get_max_iterations(), MAX_ITERATIONS)

    def test_bad_max_iterations(self):
        network = Network(max_iterations=20)

        for value in [float('nan'), 'many', None]:
            with self.assertRaises(ValueError):
                network.set_max_iterations(value)

        self.assertEqual(network.get_max_iterations(), 20)

    def test_bad_functions(self):
        network = Network()

        with self.assertRaises(TypeError):
            network.set_neural_function(None)

        with self.assertRaises(TypeError):
            network.set_derived_function(3.0)

        with self.assertRaises(TypeError):
            network.set_network_functions(np.tanh, None)

        with self.assertRaises(TypeError):
            Network(neural_function=np.tanh)

    def test_functions_set_separately(self):
        network = Network()

        network.set_neural_function(tanh.function)
        self.assertIsNone(network.activation)

        network.set_derived_function(tanh.derivative)
        self.assertIs(network.activation.function, tanh.function)
        self.assertIs(network.activation.derivative, tanh.derivative)

    def test_bad_random_state(self):
        with self.assertRaises(TypeError):
            Network(random_state=1234)

    def test_set_data_none(self):
        with self.assertRaises(ValueError):
            Network().set_data(None)

    def test_set_data_deep_copies(self):
        table = SampleTable([(0, 0), (1, 1)])
        network = Network()
        network.set_data(table)

        table[1].expected_output = 5.0
        self.assertEqual(network.get_data()[1].expected_output, 1.0)
        self.assertIsNot(network.get_data(), table)

        samples = [Sample(0, 1), Sample(1, 2)]
        network.set_data(samples)
        samples[0].input = 7.0
        self.assertEqual(network.get_data()[0].input, 0.0)

    def test_add_and_remove_data(self):
        network = Network()

        self.assertFalse(network.remove_data(1))
        self.assertTrue(network.add_data(Sample(0, 0)))
        self.assertTrue(network.add_data((1, 1)))
        self.assertFalse(network.add_data(None))
        self.assertEqual(network.get_data().table_size, 2)

        self.assertFalse(network.remove_data(0))
        self.assertTrue(network.remove_data(1))
        self.assertEqual(network.get_data().table_size, 1)


class TestNetworkInitialization(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)

    def assertUnitsInRanges(self, network):
        for unit in network.units:
            ow, iw, b = unit.get_params()
            self.assertTrue(network.output_weight_range.min <= ow <=
                            network.output_weight_range.max)
            self.assertTrue(network.input_weight_range.min <= iw <=
                            network.input_weight_range.max)
            self.assertTrue(network.bias_range.min <= b <=
                            network.bias_range.max)

    def test_repeated_initialization_in_ranges(self):
        network = make_identity_network(
            unit_count=4,
            output_weight_range=(-2, -1),
            input_weight_range=(0, 1),
            bias_range=(10, 20))

        for _ in range(5):
            network.initialize_network(random_state=self.random_state)
            self.assertEqual(len(network.units), 4)
            self.assertUnitsInRanges(network)

    def test_units_share_starting_point(self):
        network = make_identity_network(unit_count=3)
        network.initialize_network(random_state=self.random_state)

        params = [unit.get_params() for unit in network.units]
        self.assertTrue(all(p == params[0] for p in params))

    def test_independent_units(self):
        network = make_identity_network(unit_count=3)
        network.initialize_network(random_state=self.random_state,
                                   independent_units=True)

        self.assertUnitsInRanges(network)

        params = [unit.get_params() for unit in network.units]
        self.assertEqual(len(set(params)), 3)

    def test_reinitialization_replaces_units(self):
        network = make_identity_network(unit_count=2)
        network.initialize_network(random_state=self.random_state)
        old_units = list(network.units)

        network.initialize_network(random_state=self.random_state)

        for old, new in zip(old_units, network.units):
            self.assertIsNot(old, new)

    def test_same_seed_same_units(self):
        first = make_identity_network(random_state=np.random.RandomState(7))
        second = make_identity_network(random_state=np.random.RandomState(7))

        first.initialize_network()
        second.initialize_network()

        self.assertEqual(first.units[0].get_params(),
                         second.units[0].get_params())

    def test_unseeded_initialization_warns(self):
        network = make_identity_network()

        with self.assertLogs('random_state', level='WARNING'):
            network.initialize_network()

        self.assertUnitsInRanges(network)


class TestNetworkTraining(unittest.TestCase):

    def setUp(self):
        self.pairs = [(0.0, 0.0), (0.25, 0.25), (0.5, 0.5),
                      (0.75, 0.75), (1.0, 1.0)]

    def test_run_without_functions(self):
        network = Network()
        network.set_data(self.pairs)
        network.initialize_network(random_state=np.random.RandomState(0))

        with self.assertRaises(NetworkNotConfigured):
            network.run_neural_network()

    def test_run_without_data(self):
        network = make_identity_network()
        network.initialize_network(random_state=np.random.RandomState(0))

        with self.assertRaises(NetworkNotConfigured):
            network.run_neural_network()

        network.set_data(SampleTable(0))

        with self.assertRaises(NetworkNotConfigured):
            network.run_neural_network()

    def test_run_without_initialization(self):
        network = make_identity_network()
        network.set_data(self.pairs)

        with self.assertRaises(NetworkNotInitialized):
            network.run_neural_network()

        with self.assertRaises(NetworkNotInitialized):
            network.predict(0.5)

    def test_end_to_end_identity(self):
        network = make_identity_network(
            learning_rate=0.01,
            unit_count=1,
            max_iterations=1000,
            max_error=0.0001,
            output_weight_range=(0, 1),
            input_weight_range=(0, 1),
            bias_range=(0, 1))

        network.set_data(SampleTable(self.pairs))
        network.initialize_network(random_state=np.random.RandomState(0))
        last_error = network.run_neural_network()

        self.assertEqual(last_error, network.last_error)
        self.assertTrue(network.last_error <= 0.0001 or
                        network.iteration == 1000)

        for sample in network.get_data():
            self.assertLess(
                abs(sample.actual_output - sample.expected_output), 0.05)

    def test_training_reduces_error(self):
        x = np.linspace(0, 1, 11)
        kwargs = dict(learning_rate=1e-3, unit_count=1, max_error=0.0)

        untrained = make_identity_network(max_iterations=1, **kwargs)
        untrained.set_data(SampleTable.from_arrays(x, x))
        untrained.initialize_network(random_state=np.random.RandomState(3))
        untrained.run_neural_network()

        trained = make_identity_network(max_iterations=500, **kwargs)
        trained.set_data(SampleTable.from_arrays(x, x))
        trained.initialize_network(random_state=np.random.RandomState(3))
        trained.run_neural_network()

        self.assertEqual(trained.iteration, 500)
        self.assertLess(trained.last_error, untrained.last_error)

    def test_training_reduces_error_nonlinear(self):
        x = np.linspace(-1, 1, 21)

        for activation in [tanh, algebraic_sigmoid]:
            network = Network(
                neural_function=activation.function,
                derived_function=activation.derivative,
                learning_rate=0.005, max_iterations=300, max_error=0.0)
            network.set_data(SampleTable.from_arrays(x, 0.5 * np.sin(x)))
            network.initialize_network(random_state=np.random.RandomState(1))
            network.run_neural_network()

            self.assertEqual(len(network.error_history), 300)
            self.assertLess(network.error_history[-1],
                            network.error_history[0])

    def test_stops_at_max_error(self):
        network = make_identity_network(
            learning_rate=0.01, max_iterations=MAX_ITERATIONS, max_error=0.1)
        network.set_data(self.pairs)
        network.initialize_network(random_state=np.random.RandomState(0))
        network.run_neural_network()

        self.assertLess(network.iteration, MAX_ITERATIONS)
        self.assertLessEqual(network.last_error, 0.1)
        self.assertGreater(network.error_history[-2], 0.1)

    def test_error_lags_weight_update(self):
        network = make_identity_network(
            learning_rate=0.05, max_iterations=1, max_error=0.0)
        network.set_data(self.pairs)
        network.initialize_network(random_state=np.random.RandomState(5))

        before = [network.predict(x) for x, _ in self.pairs]
        expected_error = 0.5 * sum(
            (y - o)**2 for (_, y), o in zip(self.pairs, before))

        network.run_neural_network()

        self.assertAlmostEqual(network.last_error, expected_error)
        self.assertAlmostEqual(squared_error(network.get_data()),
                               expected_error)

        # The outputs stored in the data are the pre-update ones ...
        for sample, o in zip(network.get_data(), before):
            self.assertAlmostEqual(sample.actual_output, o)

        # ... so the error differs from one recomputed after the update.
        after = [network.predict(x) for x, _ in self.pairs]
        post_update_error = 0.5 * sum(
            (y - o)**2 for (_, y), o in zip(self.pairs, after))

        self.assertNotAlmostEqual(network.last_error, post_update_error)

    def test_shared_start_units_stay_identical(self):
        network = Network(
            neural_function=tanh.function, derived_function=tanh.derivative,
            unit_count=3, learning_rate=0.01, max_iterations=50,
            max_error=0.0)
        network.set_data(self.pairs)
        network.initialize_network(random_state=np.random.RandomState(2))
        network.run_neural_network()

        params = [unit.get_params() for unit in network.units]
        self.assertTrue(all(p == params[0] for p in params))

    def test_predict_matches_stored_outputs(self):
        network = make_identity_network(max_iterations=1)
        network.set_data(self.pairs)
        network.initialize_network(random_state=np.random.RandomState(4))

        before = [network.predict(x) for x, _ in self.pairs]
        network.run_neural_network()

        self.assertEqual(list(network.get_data().actual_outputs), before)

    def test_divergence_raises(self):
        network = make_identity_network(
            learning_rate=1e6, max_iterations=1000, max_error=0.0)
        network.set_data(self.pairs)
        network.initialize_network(random_state=np.random.RandomState(0))

        with np.errstate(all='ignore'):
            with self.assertLogs('network', level='ERROR'):
                with self.assertRaises(TrainingDiverged):
                    network.run_neural_network()

    def test_progress_logging(self):
        network = make_identity_network(
            learning_rate=0.001, max_iterations=20, max_error=0.0,
            log_every=10)
        network.set_data(self.pairs)
        network.initialize_network(random_state=np.random.RandomState(0))

        with self.assertLogs('network', level='DEBUG') as captured:
            network.run_neural_network()

        progress = [line for line in captured.output
                    if 'Error = ' in line]
        self.assertEqual(len(progress), 2)
        self.assertIn('(Iteration = 00010)', progress[0])


if __name__ == '__main__':
    unittest.main()
