from crud.identifiers import quote_identifier


def execute_count_rows(conn, table):
    with conn.cursor() as cursor:
        cursor.execute(f"SELECT COUNT(*) AS row_count FROM {quote_identifier(table)}")
        row = cursor.fetchone()
    if isinstance(row, dict):
        return int(row["row_count"])
    return int(row[0])
