# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest
from pathlib import Path

from sut_audit.retrieval.corpus_cache import ReferenceCorpusCache
from sut_audit.retrieval.rule_retriever import RuleContextRetriever


@pytest.fixture
def sample_report_text():
    """OCR output of a rheumatology report with a drug grid"""
    return """T.C. SAĞLIK BAKANLIĞI
## Rapor Bilgileri
| Rapor No | 12345 |

Tanı: M05.8 - Romatoid artrit, ayrıca E11.9
Doktor: Dr. Ayşe Yılmaz, Romatoloji Uzmanı

## Rapor Etkin Madde Bilgileri

| Etkin Madde Kodu | Etkin Madde Adı | Form | Tedavi Şeması |
|---|---|---|---|
| SGKF12 | **ADALIMUMAB** | Enjektabl | 1 x 40 mg, günde 1 |
| SGKA01 | METOTREKSAT | Ağızdan Katı | 1 x 15 mg, günde 1x1 |
| SGKF12 | adalimumab | Enjektabl | 1 x 40 mg |

## Açıklamalar
Hasta 6 aydır tedavi altında.
"""


@pytest.fixture
def key_value_report_text():
    """Drug section rendered as a two-column label/value table"""
    return """Rapor Etkin Madde Bilgileri
| Etkin Madde Kodu | SGKF12 PARACETAMOL |
| Etkin Madde Adı | PARACETAMOL |
| Form | Ağızdan Katı |
| Tedavi Şeması | 2 x 500 mg, günde 2x1 |
"""


@pytest.fixture
def free_text_report_text():
    """Report without any drug table"""
    return """Hasta: Mehmet Demir
Tanı: J45
1. PARACETAMOL 500 MG TABLET  günde 3x1  30 gün
2. Ventolin inhaler - günde 2 puf
Açıklama: hasta 3 aydır tedavi görüyor
"""


@pytest.fixture
def sut_text():
    """Small stand-in for the SUT reference document"""
    return (
        "4.2.14 Romatoid artrit tedavisinde ilaç kullanım ilkeleri. "
        + "Genel hükümler. " * 100
        + "ADALİMUMAB ancak romatoloji uzmanınca düzenlenen sağlık kurulu raporu ile verilir. "
        + "Ek kurallar. " * 150
        + "Adalimumab için DAS28 skoru 5.1 üzerinde olmalıdır."
    )


@pytest.fixture
def sut_file(tmp_path, sut_text):
    """SUT text written to a .txt file"""
    path = tmp_path / "SUT.txt"
    path.write_text(sut_text, encoding="utf-8")
    return path


@pytest.fixture
def corpus_cache(sut_file):
    return ReferenceCorpusCache(sut_file)


@pytest.fixture
def retriever(corpus_cache):
    return RuleContextRetriever(corpus_cache, window=1000, max_matches=5)
