import logging

from .config import CODE_FILLER, UNKNOWN_CODE

logger = logging.getLogger(__name__)

# pharmacy category -> 3-letter code
DEFAULT_CATEGORY_CODES = {
    'Pain Reliever': 'PAI',
    'Fever Reducer': 'FEV',
    'NSAIDs': 'NSA',
    'Antibiotic': 'ANB',
    'Antifungal': 'ANF',
    'Antiviral': 'ANV',
    'Cough Expectorant': 'CEX',
    'Cough Suppressant': 'CSU',
    'Cold & Flu': 'CFU',
    'Allergy': 'ALL',
    'Stomach Care': 'STC',
    'Antacid': 'ATA',
    'Anti-diarrheal': 'ADA',
    'Laxative': 'LAX',
    'Anti-emetic': 'AEM',
    'Vitamin C': 'VTC',
    'Multivitamin': 'MVT',
    'B-Complex': 'BCO',
    'Minerals': 'MIN',
    'Supplements': 'SUP',
    'Herbal Medicine': 'HER',
    'Skin Ointment': 'SKO',
    'Antifungal Cream': 'AFC',
    'Steroid Cream': 'STC',
    'Eye Care': 'EYE',
    'Ear Care': 'EAR',
    'First Aid': 'FAI',
    'Alcohol / Disinfectant': 'ALD',
    'Baby Care': 'BAB',
    "Women's Health": 'WMH',
    'Hypertension Meds': 'HYP',
    'Diabetes Meds': 'DIA',
    'Cholesterol Meds': 'CHO',
    'Respiratory / Asthma': 'RES',
    'Urinary Care': 'URI',
    'Mental Health': 'MEN',
    'Oral Rehydration Solution': 'ORS',
}


def derive_code(category_name):
    """Build a 3-letter code for a category that has no registered one.

    Single words give their first three letters; several words give their
    initials, topped up from the first word and then with ``X``.
    """
    if category_name is None or not category_name.strip():
        return UNKNOWN_CODE
    clean = category_name.strip().upper()
    words = clean.split()
    if len(words) == 1:
        code = clean[:3]
    else:
        code = ''.join(w[0] for w in words[:3])
    if len(code) < 3:
        # continue from where the first word's letters left off
        start = 1 if len(words) > 1 else len(code)
        code += words[0][start:start + 3 - len(code)]
    return code.ljust(3, CODE_FILLER)[:3]


class CategoryCodes:
    """Lookup table from category names to 3-letter codes.

    Built explicitly and passed around; each instance owns its own copy of
    the mapping so tests can supply custom tables.
    """

    def __init__(self, codes=None):
        self._codes = dict(DEFAULT_CATEGORY_CODES if codes is None else codes)

    def resolve(self, category_name):
        if category_name is None:
            return UNKNOWN_CODE
        code = self._codes.get(category_name)
        if code is not None:
            return code
        return derive_code(category_name)

    def add(self, category_name, code):
        """Register a code; anything that is not exactly 3 characters is ignored."""
        if category_name is None or code is None or len(code) != 3:
            logger.warning('Ignoring category code %r for %r', code, category_name)
            return False
        self._codes[category_name] = code.upper()
        return True

    def all_codes(self):
        return dict(self._codes)

    def __contains__(self, category_name):
        return category_name in self._codes

    def __len__(self):
        return len(self._codes)
