from tablepyground import NA, col, list_sheets, make_table, read_spreadsheet, select, select_rows

t = make_table(
    facts=["a", "b", "b", "a"],
    numbers=[1, 2, 3, 4],
    ratio=[0.5, NA, 1.5, 2.0],
)
print(t)
print()
print(select_rows(t, (col("facts") == "a") & (col("numbers") > 2)))
print()
print(select(t, slice(1, 3), ["ratio", "facts"]))
print()

for sheet in list_sheets("data/shops.xlsx"):
    shops = read_spreadsheet("data/shops.xlsx", sheet=sheet)
    print(f"--- {sheet}")
    print(shops.head())
