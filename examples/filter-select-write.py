import logging

from tablepyground import ColumnType, col, filter_select_write, read_delimited

logging.basicConfig(level=logging.DEBUG)

sales = read_delimited(
    "data/sales.csv",
    column_type_overrides={
        "Product": ColumnType.categorical(["Dress", "Car", "Videogame", "Laptop", "TV"]),
    },
)
print(sales)

laptops = filter_select_write(
    sales,
    (col("Product") == "Laptop") & (col("Quantity") >= 5),
    ["Date", "Quantity", "Price"],
    "data/laptops.csv",
)
print(laptops)
