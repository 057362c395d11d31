"""Tests for dense multilinear extensions."""

import pytest

from sumcheck.errors import EmptyDomainError, NumVarsMismatchError
from sumcheck.primitives.field import FF2, ff2_to_flat_list
from sumcheck.primitives.multilinear import MultilinearExtension


class TestConstruction:

    def test_num_vars(self) -> None:
        mle = MultilinearExtension.from_base([1, 2, 3, 4, 5, 6, 7, 8])
        assert mle.num_vars() == 3
        assert len(mle) == 8

    def test_not_power_of_two(self) -> None:
        """Tables must have 2^n entries."""
        with pytest.raises(ValueError):
            MultilinearExtension.from_base([1, 2, 3])
        with pytest.raises(ValueError):
            MultilinearExtension.from_base([])

    def test_num_vars_mismatch(self) -> None:
        with pytest.raises(NumVarsMismatchError):
            MultilinearExtension.from_base([1, 2, 3, 4], num_vars=3)

    def test_input_is_copied(self) -> None:
        """Later writes to the source array do not leak into the MLE."""
        source = FF2([1, 2, 3, 4])
        mle = MultilinearExtension(source)
        source[0] = FF2(99)
        assert mle.evaluations[0] == FF2(1)


class TestFold:

    def test_fold_formula(self) -> None:
        """fold(c)[b] = (1 - c) * lo[b] + c * hi[b]."""
        mle = MultilinearExtension.random(3, seed=1)
        c = FF2.Random(seed=2)
        lo, hi = mle.halves()
        folded = mle.fold(c)
        assert folded.num_vars() == 2
        for b in range(4):
            assert folded.evaluations[b] == (FF2(1) - c) * lo[b] + c * hi[b]

    def test_fold_at_boolean_points(self) -> None:
        """Folding at 0 or 1 selects a half of the table."""
        mle = MultilinearExtension.from_base([1, 2, 3, 4])
        assert ff2_to_flat_list(mle.fold(0).evaluations) == [1, 0, 2, 0]
        assert ff2_to_flat_list(mle.fold(1).evaluations) == [3, 0, 4, 0]

    def test_fold_does_not_mutate(self) -> None:
        mle = MultilinearExtension.random(2, seed=5)
        before = ff2_to_flat_list(mle.evaluations)
        mle.fold(FF2.Random(seed=6))
        assert ff2_to_flat_list(mle.evaluations) == before

    def test_fold_zero_variables(self) -> None:
        """A constant MLE has no variable left to fix."""
        mle = MultilinearExtension.from_base([7])
        with pytest.raises(EmptyDomainError):
            mle.fold(FF2(3))


class TestEvaluate:

    def test_hypercube_points(self) -> None:
        """The leading variable is the most significant index bit."""
        mle = MultilinearExtension.random(3, seed=11)
        for index in range(8):
            point = [(index >> (2 - k)) & 1 for k in range(3)]
            assert mle.evaluate(point) == mle.evaluations[index]

    def test_multilinear_in_each_variable(self) -> None:
        """f(.., t, ..) is affine in t."""
        mle = MultilinearExtension.random(2, seed=12)
        x1 = FF2.Random(seed=13)
        t = FF2.Random(seed=14)
        f0 = mle.evaluate([FF2(0), x1])
        f1 = mle.evaluate([FF2(1), x1])
        assert mle.evaluate([t, x1]) == f0 + t * (f1 - f0)

    def test_wrong_point_length(self) -> None:
        mle = MultilinearExtension.random(2, seed=0)
        with pytest.raises(NumVarsMismatchError):
            mle.evaluate([FF2(1)])

    def test_sum(self) -> None:
        mle = MultilinearExtension.from_base([1, 2, 3, 4])
        assert mle.sum() == FF2(10)

    def test_scalar(self) -> None:
        mle = MultilinearExtension.from_base([5, 9])
        assert mle.fold(FF2(2)).scalar() == FF2(13)
        with pytest.raises(ValueError):
            mle.scalar()
