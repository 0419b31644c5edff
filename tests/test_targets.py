import unittest
from typing import Optional

from calcugrade.core.grades import Period, calculate_period, final_grade
from calcugrade.core.scores import ComponentScore, PeriodInputs
from calcugrade.core.targets import (
    EVEN_DISTRIBUTION,
    FOCUS_ON_EXAM,
    FOCUS_ON_QUIZZES,
    MSG_ALL_FILLED,
    MSG_EXCEEDS_MAX,
    MSG_FINALS_IMPOSSIBLE,
    MSG_HERE_ARE_SCORES,
    MSG_MIDTERM_IMPOSSIBLE,
    MSG_NO_MISSING,
    MSG_ON_TRACK,
    MSG_TARGET_REACHED,
    calculate_needed_scores,
    calculate_points_needed,
    current_contribution,
    is_period_complete,
    required_contribution,
)


def make_period(
    q1: Optional[float] = None,
    q2: Optional[float] = None,
    exam: Optional[float] = None,
    attendance: Optional[float] = None,
    problem_set: Optional[float] = None,
    q2_max: float = 100,
) -> PeriodInputs:
    return PeriodInputs(
        quizzes=(ComponentScore(q1), ComponentScore(q2, q2_max)),
        exam=ComponentScore(exam),
        attendance=attendance,
        problem_set=problem_set,
    )


COMPLETE = make_period(80, 90, 70, 10, 10)


class CompletenessTests(unittest.TestCase):
    def test_complete_needs_quizzes_and_exam(self):
        self.assertTrue(is_period_complete(make_period(80, 90, 70)))
        self.assertFalse(is_period_complete(make_period(80, None, 70, 10, 10)))
        self.assertFalse(is_period_complete(make_period(80, 90, None, 10, 10)))

    def test_both_complete_and_target_reached(self):
        report = calculate_points_needed(COMPLETE, COMPLETE, 80, 90)
        self.assertTrue(report.is_possible)
        self.assertEqual(report.message, MSG_TARGET_REACHED)
        self.assertEqual(report.needed_scores, {})

    def test_both_complete_and_target_missed(self):
        report = calculate_points_needed(COMPLETE, COMPLETE, 60, 60)
        self.assertFalse(report.is_possible)
        self.assertEqual(report.message, "All fields are filled but you've only reached 60.00%.")

    def test_fully_specified_period_never_suggests_scores(self):
        report = calculate_needed_scores(COMPLETE, Period.FINALS, 80)
        self.assertEqual(report.message, MSG_ALL_FILLED)
        self.assertEqual(report.needed_scores, {})
        self.assertEqual(report.scenarios, [])

    def test_both_incomplete_is_neutral(self):
        report = calculate_points_needed(PeriodInputs.empty(), PeriodInputs.empty(), 0, 0)
        self.assertTrue(report.is_possible)
        self.assertEqual(report.message, MSG_NO_MISSING)
        self.assertEqual(report.needed_scores, {})


class RequiredContributionTests(unittest.TestCase):
    def test_finals_uses_midterm_grade(self):
        self.assertAlmostEqual(required_contribution(Period.FINALS, 80, 75), 51 / 0.7)

    def test_midterm_uses_assumed_finals(self):
        self.assertAlmostEqual(required_contribution(Period.MIDTERM, 0, 75), 5 / 0.3)
        self.assertAlmostEqual(required_contribution(Period.MIDTERM, 0, 75, assumed_finals=75), 75.0)

    def test_midterm_ignores_current_finals_grade(self):
        empty = PeriodInputs.empty()
        low = calculate_needed_scores(empty, Period.MIDTERM, 0, 75, assumed_finals=75)
        high = calculate_needed_scores(empty, Period.MIDTERM, 100, 75, assumed_finals=75)
        self.assertEqual(low, high)


class CurrentContributionTests(unittest.TestCase):
    def test_absent_attendance_and_problem_set_default_to_full(self):
        self.assertAlmostEqual(current_contribution(PeriodInputs.empty()), 20.0)

    def test_explicit_zero_is_not_defaulted(self):
        self.assertEqual(current_contribution(make_period(attendance=0, problem_set=0)), 0.0)

    def test_present_quiz_owns_half_the_quiz_weight(self):
        self.assertAlmostEqual(current_contribution(make_period(80, attendance=10, problem_set=10)), 35.75)


class NeededScoresTests(unittest.TestCase):
    def test_finals_with_one_quiz_and_exam_missing(self):
        finals = make_period(80, None, None, 10, 10)
        report = calculate_points_needed(COMPLETE, finals, 80, 0, 75)

        self.assertTrue(report.is_possible)
        self.assertEqual(report.message, MSG_HERE_ARE_SCORES)
        self.assertEqual(report.needed_scores, {"Quiz 4": "19 out of 100", "Major Exam": "19 out of 100"})
        self.assertEqual(
            [scenario.description for scenario in report.scenarios],
            [EVEN_DISTRIBUTION, FOCUS_ON_EXAM, FOCUS_ON_QUIZZES],
        )
        self.assertEqual(report.scenarios[1].scores, {"Quiz 4": "60 out of 100", "Major Exam": "3 out of 100"})
        self.assertEqual(
            report.scenarios[2].scores,
            {"Major Exam": "70 out of 100", "Quiz 4": "No additional points needed"},
        )

    def test_needed_scores_reach_the_target(self):
        finals = make_period(80, 19, 19, 10, 10)
        self.assertGreaterEqual(final_grade(80, calculate_period(finals)), 75)

    def test_empty_finals_after_perfect_midterm(self):
        report = calculate_needed_scores(PeriodInputs.empty(), Period.FINALS, 100, 75)
        self.assertTrue(report.is_possible)
        self.assertEqual(
            report.needed_scores,
            {"Quiz 3": "11 out of 100", "Quiz 4": "11 out of 100", "Major Exam": "11 out of 100"},
        )

    def test_finals_infeasible_after_zero_midterm(self):
        report = calculate_needed_scores(PeriodInputs.empty(), Period.FINALS, 0, 75)
        self.assertFalse(report.is_possible)
        self.assertEqual(report.message, MSG_FINALS_IMPOSSIBLE)
        self.assertEqual(report.needed_scores, {})
        self.assertEqual(report.scenarios, [])

    def test_midterm_infeasible_message(self):
        report = calculate_points_needed(PeriodInputs.empty(), COMPLETE, 0, 90, target=110)
        self.assertFalse(report.is_possible)
        self.assertEqual(report.message, MSG_MIDTERM_IMPOSSIBLE)

    def test_midterm_on_track_against_perfect_finals(self):
        report = calculate_needed_scores(PeriodInputs.empty(), Period.MIDTERM, 0, 75)
        self.assertTrue(report.is_possible)
        self.assertEqual(report.message, MSG_ON_TRACK)

    def test_midterm_against_assumed_target_finals(self):
        report = calculate_needed_scores(PeriodInputs.empty(), Period.MIDTERM, 0, 75, assumed_finals=75)
        self.assertEqual(
            report.needed_scores,
            {"Quiz 1": "38 out of 100", "Quiz 2": "38 out of 100", "Major Exam": "38 out of 100"},
        )

    def test_already_on_track(self):
        finals = make_period(100, 100, None, 10, 10)
        report = calculate_needed_scores(finals, Period.FINALS, 90, 75)
        self.assertTrue(report.is_possible)
        self.assertEqual(report.message, MSG_ON_TRACK)
        self.assertEqual(report.needed_scores, {})

    def test_exceeding_max_is_infeasible(self):
        finals = make_period(0, 0, None, 10, 10)
        report = calculate_needed_scores(finals, Period.FINALS, 40, 75)
        self.assertFalse(report.is_possible)
        self.assertEqual(report.message, MSG_EXCEEDS_MAX)
        self.assertEqual(report.needed_scores, {"Major Exam": "Max score needed (100)"})
        self.assertEqual(len(report.scenarios), 2)

    def test_requirement_just_under_max_is_feasible(self):
        # exam inverts to about 99.30 out of 100
        finals = make_period(0, 0, None, 10, 10)
        report = calculate_needed_scores(finals, Period.FINALS, 100, 87.64)
        self.assertTrue(report.is_possible)
        self.assertEqual(report.message, MSG_HERE_ARE_SCORES)
        self.assertEqual(report.needed_scores, {"Major Exam": "100 out of 100"})

    def test_fraction_of_a_small_max_rounds_up_to_the_max(self):
        finals = make_period(80, None, None, 10, 10, q2_max=1)
        report = calculate_needed_scores(finals, Period.FINALS, 80, 75)

        self.assertTrue(report.scenarios[0].is_possible)
        self.assertTrue(report.is_possible)
        self.assertEqual(report.needed_scores, {"Quiz 4": "1 out of 1", "Major Exam": "19 out of 100"})

    def test_non_finite_inputs_do_not_raise(self):
        unbounded = calculate_needed_scores(make_period(attendance=float("-inf")), Period.FINALS, 80, 75)
        self.assertFalse(unbounded.is_possible)
        self.assertEqual(unbounded.needed_scores["Major Exam"], "Max score needed (100)")

        undefined = calculate_needed_scores(PeriodInputs.empty(), Period.FINALS, float("nan"), 75)
        self.assertTrue(undefined.is_possible)

        infinite_max = PeriodInputs(
            quizzes=(ComponentScore(), ComponentScore()),
            exam=ComponentScore(None, float("inf")),
        )
        report = calculate_needed_scores(infinite_max, Period.FINALS, 100, 75)
        self.assertEqual(report.needed_scores["Major Exam"], "11 out of 100")

    def test_unusable_max_on_present_quiz_does_not_raise(self):
        inputs = PeriodInputs(
            quizzes=(ComponentScore(5, 0), ComponentScore()),
            exam=ComponentScore(),
        )
        report = calculate_needed_scores(inputs, Period.FINALS, 80, 75)
        self.assertIn("Quiz 4", report.needed_scores)


if __name__ == "__main__":
    unittest.main()
