"""Calculator untuk skor kedisiplinan pegawai."""

from typing import Dict, List, Optional


class DisciplineScoreCalculator:
    """Weighted sum over the four discipline components.

    Inputs are percentages but are not clamped; out-of-range values
    propagate arithmetically into the final score.
    """

    WEIGHTS: Dict[str, float] = {
        "attendance": 0.25,
        "assembly": 0.15,
        "daily_log": 0.20,
        "report": 0.40,
    }

    CATEGORIES: List[str] = [
        "Sangat Baik (>90%)",
        "Baik (75-90%)",
        "Cukup (60-75%)",
        "Kurang (<60%)",
    ]

    def calculate_final(
        self,
        attendance: float,
        assembly: float,
        daily_log: float,
        report: float,
    ) -> float:
        """Kalkulasi skor akhir dari empat komponen."""
        return (
            attendance * self.WEIGHTS["attendance"]
            + assembly * self.WEIGHTS["assembly"]
            + daily_log * self.WEIGHTS["daily_log"]
            + report * self.WEIGHTS["report"]
        )

    def rate(self, final: float) -> str:
        """Kategori skor untuk distribusi dashboard."""
        if final > 90:
            return self.CATEGORIES[0]
        elif final >= 75:
            return self.CATEGORIES[1]
        elif final >= 60:
            return self.CATEGORIES[2]
        return self.CATEGORIES[3]

    def distribution(self, finals: List[float]) -> Dict[str, int]:
        """Count scores per category; empty categories are dropped."""
        counts = {category: 0 for category in self.CATEGORIES}
        for final in finals:
            counts[self.rate(final)] += 1
        return {category: count for category, count in counts.items() if count > 0}

    @staticmethod
    def parse_component(value: Optional[str]) -> float:
        """Lenient numeric parse; anything unparseable becomes 0."""
        if value is None:
            return 0.0
        text = str(value).strip().replace("%", "")
        if not text:
            return 0.0
        # Spreadsheet exports may use a decimal comma
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return 0.0
        if number != number:  # NaN
            return 0.0
        return number


discipline_calculator = DisciplineScoreCalculator()
