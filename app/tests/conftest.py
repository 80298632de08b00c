from __future__ import annotations

import copy

import pytest

SAMPLE_HTML = """
<html>
  <head>
    <script>var tracking = "alert";</script>
    <style>.hidden { color:red }</style>
  </head>
  <body>
    <section itemprop="abstract">
      <div class="abstract">A brief summary of the invention.</div>
    </section>
    <section itemprop="description">
      <p>This invention relates to a novel method for testing widgets.</p>
      <p>The background of the invention is described here.</p>
    </section>
    <section itemprop="claims">
      <div itemprop="claim" num="1">A method for testing comprising a step.</div>
      <div itemprop="claim" num="2">The method of claim 1, wherein the step repeats.</div>
    </section>
  </body>
</html>
"""

SAMPLE_DETAILS = {
    "title": "Test Patent for Neural Networks",
    "publication_number": "US7654321B2",
    "assignees": ["Tech Corporation"],
    "inventors": [{"name": "John Doe"}, {"name": "Jane Roe"}],
    "priority_date": "2020-01-01",
    "filing_date": "2020-02-01",
    "publication_date": "2021-03-01",
    "abstract": "This patent describes a novel method for implementing neural networks.",
    "claims": [
        "1. A method for implementing neural networks comprising...",
        "2. The method of claim 1, wherein...",
    ],
    "worldwide_applications": {
        "2020": [
            {
                "application_number": "US12/345,678",
                "country_code": "US",
                "document_id": "US7654321B2",
                "legal_status": "Active",
                "this_app": True,
            },
            {
                "application_number": "EP20123456",
                "country_code": "EP",
                "document_id": "EP1234567A1",
                "legal_status": "Pending",
                "this_app": False,
            },
        ],
        "2021": [
            {
                "application_number": "JP2021-123456",
                "country_code": "JP",
                "document_id": "JP2021123456A",
                "legal_status": "Active",
                "this_app": False,
            },
        ],
    },
    "patent_citations": {
        "original": [{"publication_number": f"US{i}"} for i in range(5)],
        "family_to_family": [{"publication_number": "US6666666"}, {"publication_number": "US7777777"}],
    },
    "cited_by": {
        "original": [{"publication_number": f"US{8000000 + i}"} for i in range(10)],
    },
}


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture
def sample_details() -> dict:
    return copy.deepcopy(SAMPLE_DETAILS)
