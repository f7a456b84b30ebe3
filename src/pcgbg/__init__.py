"""
pcgbg: procedurally generated backgrounds.

Value planes (coherent noise, distance fields, fractal classifiers) are
blended into a three-channel accumulation buffer and normalized to RGB.
"""

from pcgbg.buffer import AccumulationBuffer, DegenerateFieldError, ScalarField
from pcgbg.composite import CompositeConfig, LayerSpec, compose, render
from pcgbg.distance import DistanceField, DistanceType, sample_distance_field
from pcgbg.fractal import FractalClassifier, sample_fractal_classifier
from pcgbg.noise_field import NoiseField, sample_noise_field
