import unittest
import sys
import os
from pydantic import ValidationError

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from libenzyview.errors import ConfigurationError
from libenzyview.models import BatchSample, KineticParameters, ReactorConfig, SteadyStateResult
from libenzyview.settings import DEFAULT_SETTINGS, SolverSettings

class TestReactorConfig(unittest.TestCase):

    def test_defaults_are_valid(self):
        config = ReactorConfig()
        self.assertEqual(config.mode, "batch")
        self.assertEqual(config.mechanism, "none")
        self.assertEqual(config.build_model().params.vmax, 100)

    def test_stoichiometry_and_concentration_bounds(self):
        with self.assertRaises(ValidationError):
            ReactorConfig(a=0)
        with self.assertRaises(ValidationError):
            ReactorConfig(b=-1)
        with self.assertRaises(ValidationError):
            ReactorConfig(s10=0)
        with self.assertRaises(ValidationError):
            ReactorConfig(p20=-0.1)
        with self.assertRaises(ValidationError):
            ReactorConfig(km=float("nan"))

    def test_mechanism_fields_required(self):
        with self.assertRaises(ValidationError):
            ReactorConfig(mechanism="competitive", i=5)
        with self.assertRaises(ValidationError):
            ReactorConfig(mechanism="substrate", ksi=0)
        config = ReactorConfig(mechanism="partially-noncompetitive", i=1, ki=2, k2i=3, et=4)
        self.assertEqual(config.build_model().mechanism, "partially-noncompetitive")

    def test_unused_fields_left_absent(self):
        config = ReactorConfig(mechanism="competitive", i=5, ki=5, ksi=9, et=1)
        params = config.kinetic_parameters()
        self.assertEqual((params.i, params.ki), (5, 5))
        self.assertIsNone(params.ksi)
        self.assertIsNone(params.et)

    def test_unknown_mechanism_rejected_by_factory(self):
        config = ReactorConfig(mechanism="allosteric")
        with self.assertRaises(ConfigurationError):
            config.build_model()

    def test_batch_fields(self):
        with self.assertRaises(ValidationError):
            ReactorConfig(xmax=0)
        with self.assertRaises(ValidationError):
            ReactorConfig(xmax=1.5)
        with self.assertRaises(ValidationError):
            ReactorConfig(deactivation=True)
        self.assertEqual(ReactorConfig(xmax=1.0).xmax, 1.0)

    def test_continuous_fields(self):
        with self.assertRaises(ValidationError):
            ReactorConfig(mode="cstr", volume=10)
        with self.assertRaises(ValidationError):
            ReactorConfig(mode="cstr", volume=10, flow_rate=-2)
        with self.assertRaises(ValidationError):
            ReactorConfig(mode="series", volume=10, flow_rate=2, n_reactors=0)
        with self.assertRaises(ValidationError):
            ReactorConfig(mode="plug-flow", volume=10, flow_rate=2)
        # Batch-only settings are ignored in continuous modes
        config = ReactorConfig(mode="cstr", volume=10, flow_rate=2, xmax=5)
        self.assertEqual(config.feed().s10, 50)

class TestValueObjects(unittest.TestCase):

    def test_results_are_frozen(self):
        sample = BatchSample(t=0, s1=1, s2=0, p1=0, p2=0, x=0, v=1)
        with self.assertRaises(ValidationError):
            sample.t = 5
        result = SteadyStateResult(x=0.5, s1=1, s2=0, p1=1, p2=0, v=1, tau=1)
        with self.assertRaises(ValidationError):
            result.x = 0.9
        params = KineticParameters(vmax=100, km=10)
        with self.assertRaises(ValidationError):
            params.vmax = 1

    def test_effluent(self):
        result = SteadyStateResult(x=0.5, s1=25, s2=3, p1=25, p2=1, v=1, tau=1)
        feed = result.effluent()
        self.assertEqual((feed.s10, feed.s20, feed.p10, feed.p20), (25, 3, 25, 1))

class TestSolverSettings(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(DEFAULT_SETTINGS.data_points, 200)
        self.assertLess(DEFAULT_SETTINGS.conversion_max, 1.0)
        self.assertFalse(DEFAULT_SETTINGS.check_monotonicity)

    def test_bounds(self):
        with self.assertRaises(ValidationError):
            SolverSettings(conversion_max=1.0)
        with self.assertRaises(ValidationError):
            SolverSettings(data_points=0)
        with self.assertRaises(ValidationError):
            SolverSettings(bisection_tol=0)
        with self.assertRaises(ValidationError):
            SolverSettings(bisection_max_iter=0)

if __name__ == '__main__':
    unittest.main()
