"""Short display titles for question papers, e.g. "DSDV 3rd Sem 2025"."""

SUBJECT_ABBREVIATIONS: dict[str, str] = {
    "nas": "NAS",
    "asd": "ASD",
    "dsdv": "DSDV",
    "coa": "COA",
    "dsa": "DSA",
    "ai": "AI",
    "mathematics": "MATH",
    "mathematics_1": "MATH-1",
    "mathematics_2": "MATH-2",
    "mathematics_3": "MATH-3",
    "mathematics_4": "MATH-4",
    "physics": "PHY",
    "chemistry": "CHEM",
    "biology": "BIO",
    "english": "ENG",
    "hindi": "HINDI",
    "history": "HIST",
    "geography": "GEO",
    "economics": "ECO",
    "accountancy": "ACC",
    "business_studies": "BS",
    "computer_science": "CS",
    "political_science": "POL",
    "sociology": "SOC",
    "psychology": "PSY",
    "software_engineering": "SE",
    "mechanics": "MECH",
    "python": "PY",
    "c": "C",
    "java": "JAVA",
    "electrical_engineering": "EE",
    "electronics_engineering": "ECE",
    "computer_engineering": "CE",
    "other": "OTHER",
}


def subject_abbreviation(subject: str) -> str:
    return SUBJECT_ABBREVIATIONS.get(subject, subject.upper())


def ordinal_suffix(n: int) -> str:
    if 10 <= n % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def format_paper_title(subject: str, semester: int | None, year: int) -> str:
    abbr = subject_abbreviation(subject)
    if semester:
        return f"{abbr} {semester}{ordinal_suffix(semester)} Sem {year}"
    return f"{abbr} {year}"
