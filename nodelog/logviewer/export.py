# Export functionality for log records
# Contains functions for writing records to CSV and formatting a record as text

import csv
import datetime
import json


def export_records_to_csv(records, nodes, file):
    """Write *records* to an open text *file* as CSV with one column per node.

    The header is ``t`` followed by the node names. Each record produces one
    line: its original timestamp, then its full JSON representation in the
    column of its node and empty strings in every other node column.

    Returns the number of records written.
    """
    writer = csv.writer(file, delimiter=',', escapechar='\\', doublequote=False, lineterminator='\n')
    writer.writerow(['t'] + list(nodes))

    count = 0
    for record in records:
        row = [record.timestamp.original]
        payload = json.dumps(record.to_dict(), ensure_ascii=False)
        for node in nodes:
            row.append(payload if node == record.node else '')
        writer.writerow(row)
        count += 1
    return count


def export_records_to_csv_file(records, nodes, filename):
    """Write *records* to the CSV file at *filename*; see export_records_to_csv."""
    with open(filename, 'w', encoding='utf-8', newline='') as fh:
        return export_records_to_csv(records, nodes, fh)


def default_export_filename(now=None):
    """Return a file name like ``nodelog-2019-05-15T00-49-48-539189.csv``."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    stamp = now.replace(tzinfo=None).isoformat()
    return 'nodelog-' + stamp.replace(':', '-').replace('.', '-') + '.csv'


def format_record_as_text(record):
    """Format a record for the clipboard: its summary fields, then its extra fields."""
    basic = json.dumps(record.basic(), indent=2, ensure_ascii=False)
    extra = json.dumps(record.extra, indent=2, ensure_ascii=False)
    return f"{basic}\n{extra}"
