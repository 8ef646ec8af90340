"""Summaries and downloadable reports for a list of analysis results."""
from __future__ import annotations

import csv
import html
import io
import json
from datetime import datetime, timezone
from typing import Sequence

from ..schemas import Sentiment, SentimentResult, SentimentSummary

CSV_HEADERS = ["Text", "Sentiment", "Confidence", "Keywords", "Explanation", "Timestamp"]


def summarize(results: Sequence[SentimentResult]) -> SentimentSummary:
    counts = {sentiment: 0 for sentiment in Sentiment}
    for result in results:
        counts[result.sentiment] += 1
    average = (
        sum(result.confidence for result in results) / len(results) if results else 0.0
    )
    return SentimentSummary(
        total=len(results),
        positive=counts[Sentiment.positive],
        negative=counts[Sentiment.negative],
        neutral=counts[Sentiment.neutral],
        average_confidence=average,
    )


def to_csv(results: Sequence[SentimentResult]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for result in results:
        writer.writerow(
            [
                result.text,
                result.sentiment.value,
                f"{result.confidence * 100:.2f}",
                ", ".join(result.keywords),
                result.explanation,
                result.timestamp.isoformat(),
            ]
        )
    return buffer.getvalue()


def to_json(results: Sequence[SentimentResult]) -> str:
    document = {
        "exportDate": datetime.now(timezone.utc).isoformat(),
        "totalResults": len(results),
        "summary": summarize(results).model_dump(),
        "results": [result.model_dump(mode="json") for result in results],
    }
    return json.dumps(document, indent=2)


def to_html(results: Sequence[SentimentResult]) -> str:
    """Printable report; open in a browser and print to PDF."""
    summary = summarize(results)
    sections = []
    for result in results:
        sections.append(
            '<div class="result">'
            f"<p><strong>Text:</strong> {html.escape(result.text)}</p>"
            f'<p><strong>Sentiment:</strong> <span class="sentiment {result.sentiment.value}">'
            f"{result.sentiment.value.upper()}</span></p>"
            f"<p><strong>Confidence:</strong> {result.confidence * 100:.1f}%</p>"
            f'<p><strong>Keywords:</strong> <span class="keywords">'
            f"{html.escape(', '.join(result.keywords))}</span></p>"
            f"<p><strong>Explanation:</strong> {html.escape(result.explanation)}</p>"
            f"<p><strong>Timestamp:</strong> {result.timestamp.isoformat()}</p>"
            "</div>"
        )
    generated = datetime.now(timezone.utc).date().isoformat()
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n<title>Sentiment Analysis Report</title>\n"
        "<style>\n"
        "body { font-family: Arial, sans-serif; margin: 40px; }\n"
        ".summary { background: #f5f5f5; padding: 20px; margin-bottom: 30px; }\n"
        ".result { border-bottom: 1px solid #eee; padding: 15px 0; }\n"
        ".positive { background: #d4edda; color: #155724; }\n"
        ".negative { background: #f8d7da; color: #721c24; }\n"
        ".neutral { background: #d1ecf1; color: #0c5460; }\n"
        ".keywords { font-style: italic; color: #666; }\n"
        "</style>\n</head>\n<body>\n"
        f"<h1>Sentiment Analysis Report</h1>\n<p>Generated on {generated}</p>\n"
        '<div class="summary">\n<h2>Summary</h2>\n'
        f"<p><strong>Total Analyses:</strong> {summary.total}</p>\n"
        f"<p><strong>Positive:</strong> {summary.positive}</p>\n"
        f"<p><strong>Negative:</strong> {summary.negative}</p>\n"
        f"<p><strong>Neutral:</strong> {summary.neutral}</p>\n"
        f"<p><strong>Average Confidence:</strong> {summary.average_confidence * 100:.1f}%</p>\n"
        "</div>\n<h2>Detailed Results</h2>\n"
        + "\n".join(sections)
        + "\n</body>\n</html>\n"
    )
