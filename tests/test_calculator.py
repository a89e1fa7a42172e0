import random
import unittest

from deliberation.calculator import Calculator
from deliberation.models import (
    CodeDecision,
    DecisionSemestre,
    DecisionUE,
    NoteECUE,
    ResultatUE,
)


class MoyenneUETests(unittest.TestCase):
    def test_ue_without_any_grade(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(None, 3), NoteECUE(None, 2)])
        self.assertIsNone(res.moyenne)
        self.assertIsNone(res.decision)
        self.assertEqual(res.credits, 5)
        self.assertEqual(res.credits_valides, 0)

    def test_weighted_average(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(12, 3), NoteECUE(15, 2)])
        self.assertEqual(res.moyenne, 13.2)
        self.assertEqual(res.decision, DecisionUE.VALIDEE)
        self.assertEqual(res.credits_valides, 5)

    def test_exactly_ten_is_validated(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(8, 1), NoteECUE(11, 2)])
        self.assertEqual(res.moyenne, 10.0)
        self.assertEqual(res.decision, DecisionUE.VALIDEE)

    def test_rounded_to_two_decimals(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(10, 1), NoteECUE(11, 2)])
        self.assertEqual(res.moyenne, 10.67)

    def test_zero_grade_is_not_missing_grade(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(0, 2), NoteECUE(None, 4)])
        self.assertEqual(res.moyenne, 0.0)
        self.assertEqual(res.decision, DecisionUE.NON_VALIDEE)
        self.assertEqual(res.credits, 6)
        self.assertEqual(res.credits_valides, 0)

    def test_ungraded_credits_earned_when_unit_passes(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(12, 2), NoteECUE(None, 4)])
        self.assertEqual(res.moyenne, 12.0)
        self.assertEqual(res.credits_valides, 6)

    def test_zero_credit_graded_items_give_no_average(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(15, 0), NoteECUE(None, 3)])
        self.assertIsNone(res.moyenne)
        self.assertIsNone(res.decision)
        self.assertEqual(res.credits, 3)

    def test_zero_credit_item_does_not_weigh(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(0, 0), NoteECUE(14, 3)])
        self.assertEqual(res.moyenne, 14.0)


class MoyenneSemestreTests(unittest.TestCase):
    def test_weighted_by_nominal_credits(self):
        res = Calculator.calculer_moyenne_semestre([
            ResultatUE(8, 10, 0, DecisionUE.NON_VALIDEE),
            ResultatUE(14, 20, 20, DecisionUE.VALIDEE),
        ])
        self.assertEqual(res.moyenne, 12.0)
        self.assertEqual(res.credits_valides, 20)
        self.assertEqual(res.credits_totaux, 30)
        self.assertEqual(res.decision, DecisionSemestre.VALIDE)

    def test_no_graded_unit(self):
        res = Calculator.calculer_moyenne_semestre([ResultatUE(None, 6, 0, None), ResultatUE(None, 4, 0, None)])
        self.assertIsNone(res.moyenne)
        self.assertIsNone(res.decision)
        self.assertEqual(res.credits_valides, 0)
        self.assertEqual(res.credits_totaux, 10)

    def test_ungraded_unit_counts_in_total_only(self):
        res = Calculator.calculer_moyenne_semestre([
            ResultatUE(12, 6, 6, DecisionUE.VALIDEE),
            ResultatUE(None, 4, 0, None),
        ])
        self.assertEqual(res.moyenne, 12.0)
        self.assertEqual(res.credits_valides, 6)
        self.assertEqual(res.credits_totaux, 10)

    def test_below_ten_not_validated(self):
        res = Calculator.calculer_moyenne_semestre([ResultatUE(9.5, 6, 0, DecisionUE.NON_VALIDEE)])
        self.assertEqual(res.decision, DecisionSemestre.NON_VALIDE)


class MoyenneAnnuelleTests(unittest.TestCase):
    def test_both_missing(self):
        self.assertIsNone(Calculator.calculer_moyenne_annuelle(None, None))

    def test_single_semester_passes_through_unchanged(self):
        self.assertEqual(Calculator.calculer_moyenne_annuelle(12, None), 12)
        self.assertEqual(Calculator.calculer_moyenne_annuelle(None, 13.456), 13.456)

    def test_mean_of_both(self):
        self.assertEqual(Calculator.calculer_moyenne_annuelle(12, 14), 13.0)
        self.assertEqual(Calculator.calculer_moyenne_annuelle(11.5, 12), 11.75)


class DecisionFinaleTests(unittest.TestCase):
    def test_no_average(self):
        res = Calculator.decision_finale(None, 0, 30)
        self.assertIsNone(res.decision)
        self.assertIsNone(res.mention)

    def test_tiers_with_all_credits(self):
        self.assertEqual(Calculator.decision_finale(16, 30, 30).decision, CodeDecision.DISTINCTION)
        self.assertEqual(Calculator.decision_finale(15.99, 30, 30).decision, CodeDecision.SATISFACTION)
        self.assertEqual(Calculator.decision_finale(14, 30, 30).decision, CodeDecision.SATISFACTION)
        self.assertEqual(Calculator.decision_finale(12, 30, 30).decision, CodeDecision.PASSABLE)
        self.assertEqual(Calculator.decision_finale(10, 30, 30).decision, CodeDecision.REUSSI)
        self.assertEqual(Calculator.decision_finale(10, 30, 30).mention, "Réussi")

    def test_missing_credits_falls_to_rattrapage(self):
        res = Calculator.decision_finale(16, 20, 30)
        self.assertEqual(res.decision, CodeDecision.ADMIS_AVEC_RATTRAPAGE)
        self.assertEqual(res.mention, "Admis avec UE à rattraper")
        self.assertEqual(Calculator.decision_finale(10, 29, 30).decision, CodeDecision.ADMIS_AVEC_RATTRAPAGE)

    def test_ajourne(self):
        self.assertEqual(Calculator.decision_finale(9.99, 30, 30).decision, CodeDecision.AJOURNE)
        res = Calculator.decision_finale(9, 20, 30)
        self.assertEqual(res.decision, CodeDecision.AJOURNE)
        self.assertEqual(res.mention, "Ajourné")


class ArrondiTests(unittest.TestCase):
    def test_half_rounds_up_in_unit(self):
        res = Calculator.calculer_moyenne_ue([NoteECUE(10.25, 1), NoteECUE(10, 1)])
        self.assertEqual(res.moyenne, 10.13)

    def test_half_rounds_up_in_annual(self):
        self.assertEqual(Calculator.calculer_moyenne_annuelle(12.25, 12.0), 12.13)

    def test_half_up_keeps_semester_validated(self):
        ue1 = Calculator.calculer_moyenne_ue([NoteECUE(10.75, 1), NoteECUE(10.5, 1)])
        ue2 = Calculator.calculer_moyenne_ue([NoteECUE(9.37, 2)])
        self.assertEqual(ue1.moyenne, 10.63)

        sem = Calculator.calculer_moyenne_semestre([ue1, ue2])
        self.assertEqual(sem.moyenne, 10.0)
        self.assertEqual(sem.decision, DecisionSemestre.VALIDE)

    def test_semester_aggregates_rounded_unit_averages(self):
        ue1 = Calculator.calculer_moyenne_ue([NoteECUE(10, 1), NoteECUE(11, 2)])
        ue2 = Calculator.calculer_moyenne_ue([NoteECUE(12.01, 2)])
        self.assertEqual(ue1.moyenne, 10.67)

        sem = Calculator.calculer_moyenne_semestre([ue1, ue2])
        a_plat = Calculator.calculer_moyenne_ue(
            [NoteECUE(10, 1), NoteECUE(11, 2), NoteECUE(12.01, 2)]
        )
        self.assertEqual(sem.moyenne, 11.21)
        self.assertEqual(a_plat.moyenne, 11.2)


class InvariantTests(unittest.TestCase):
    def test_earned_never_exceeds_total(self):
        rng = random.Random(42)
        for _ in range(200):
            ues = []
            for _ in range(rng.randint(0, 6)):
                notes = [
                    NoteECUE(
                        note=None if rng.random() < 0.3 else round(rng.uniform(0, 20), 2),
                        credits=rng.randint(0, 6),
                    )
                    for _ in range(rng.randint(0, 4))
                ]
                ue = Calculator.calculer_moyenne_ue(notes)
                self.assertLessEqual(ue.credits_valides, ue.credits)
                self.assertEqual(ue.moyenne is None, ue.decision is None)
                ues.append(ue)
            sem = Calculator.calculer_moyenne_semestre(ues)
            self.assertLessEqual(sem.credits_valides, sem.credits_totaux)


if __name__ == "__main__":
    unittest.main()
