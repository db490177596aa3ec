import os
import random
from datetime import datetime, timedelta

import openpyxl

from tablepyground import make_table, write_delimited

if not os.path.exists("data"):
    os.mkdir("data")

if not os.path.exists("data/shops.xlsx"):
    # Genera shops.xlsx, one sheet per region
    regions = {
        "north": ["Milan", "Turin", "Genoa", "Bologna"],
        "south": ["Naples", "Palermo", "Bari", "Catania"],
    }
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for region, cities in regions.items():
        sheet = wb.create_sheet(region)
        sheet.append(["City", "Shop Name", "Opened"])
        for city in cities:
            for i in range(5):
                opened = datetime(2000, 1, 1) + timedelta(days=random.randint(0, 8000))
                sheet.append([city, f"Shop {i+1} in {city}", opened.date()])
    wb.save("data/shops.xlsx")

if not os.path.exists("data/sales.csv"):
    # Genera sales.csv
    products = ["Dress", "Car", "Videogame", "Laptop", "TV"]
    start_date = datetime(2023, 1, 1)
    end_date = datetime(2024, 12, 31)

    rows = 1000
    sales = make_table(
        Product=[random.choice(products) for _ in range(rows)],
        # Some quantities were never recorded.
        Quantity=[random.choice([None] + list(range(1, 11))) for _ in range(rows)],
        Price=[round(random.uniform(10, 100), 2) for _ in range(rows)],
        Date=[
            (start_date + timedelta(days=random.randint(0, (end_date - start_date).days))).date()
            for _ in range(rows)
        ],
    )
    write_delimited(sales, "data/sales.csv")
