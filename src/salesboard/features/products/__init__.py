"""Product-sale records and their month-scoped reports.

The collection is seeded once from a remote JSON dataset and is read-only
afterwards. Endpoints take a month number and answer with a page of
matching records, sold/unsold statistics, a price-range bar chart or a
category pie chart. Route handlers delegate to the service functions,
which receive an explicit ``ProductStore`` handle."""
