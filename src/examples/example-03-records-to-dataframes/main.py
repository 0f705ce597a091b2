"""
Example 03: From an Infinite Record Stream to DataFrames

fake_records() produces Faker records forever. frames() batches them lazily
into pandas DataFrames, so bounding the pipeline bounds the work.
"""

from lazy_sequence_engine import fake_records, setup_logging

if __name__ == "__main__":
    setup_logging()

    records = fake_records(seed=42)

    print("Three batches of 5 records each:")
    for df in records.frames(batch_size=5).take(3):
        print(df[["batch_number", "id", "name", "city"]].to_string(index=False))
        print()

    records.rewind()
    table = records.select(lambda r: r["id"] % 2 == 0).to_arrow(limit=10)
    print(f"PyArrow table: {table.num_rows} rows, columns {table.column_names}")

    print("\n✅ Bounded pulls make infinite producers safe to materialize!")
