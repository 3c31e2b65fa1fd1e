# robofinder/report/json_report.py

"""
JSON report for RoboFinder.

Serializes a FinderReport to a file.
"""
import json
from pathlib import Path

from robofinder.engine import FinderReport


def render_json(report: FinderReport, output_path: Path | str) -> Path:
    """
    Save ``report`` as JSON at ``output_path``.

    :param report: FinderReport returned by the engine
    :param output_path: path of the JSON file
    :return: Path of the written file

    Example:
    ```python
    from robofinder.report.json_report import render_json
    report_path = render_json(report, 'reports/example.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = report.as_dict()

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
