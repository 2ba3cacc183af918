"""
Example: Combining Data of Different Granularity

Prices vary by product, volumes vary by region and product. Multiplying
them broadcasts the prices across regions, then point queries pull out
individual regions and products.
"""

from granular import (
    Data,
    DimensionRegistry,
    Granularity,
    Query,
    VariationEncoding,
    combine_dimensions,
    mul,
)


def with_flags(registry, flags):
    return Granularity.from_parts(registry, VariationEncoding.from_flags(flags, registry.sizes()))


def main():
    regions = DimensionRegistry().add_dimension("region", ["north", "south"])
    products = DimensionRegistry().add_dimension("product", ["apples", "pears", "plums"])

    # Low cardinality dimensions end up outermost
    registry = combine_dimensions(products, regions)
    print(f"Dimensions: {registry.names()}  sizes: {registry.sizes()}")

    volumes = Data.from_parts(with_flags(registry, [True, True]),
                              [10.0, 20.0, 30.0, 5.0, 15.0, 25.0])
    prices = Data.from_parts(with_flags(registry, [False, True]), [1.5, 2.0, 3.0])

    revenue = mul(volumes, prices)
    print(f"Revenue run-lengths: {revenue.granularity.encoding.run_lengths()}")
    print(f"Revenue: {revenue.values.tolist()}")

    south = revenue.query(Query("region", "south"))
    print(f"South: {south.values.tolist()}")
    print(f"South plums: {south.value_at(Query('product', 'plums'))}")


if __name__ == "__main__":
    main()
