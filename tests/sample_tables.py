"""
Sample pasted tables shared across tests.
"""

BASIC_TABLE_HTML = """
<table>
    <thead>
        <tr>
            <th>Store</th>
            <th>Vendor</th>
            <th>Date</th>
            <th>Description</th>
            <th>Sale Price</th>
            <th>Commission</th>
            <th>Remaining</th>
        </tr>
    </thead>
    <tbody>
        <tr>
            <td>Downtown Store</td>
            <td>Electronics Plus</td>
            <td>2024-01-15</td>
            <td>Samsung TV</td>
            <td>$899.99</td>
            <td>$89.99</td>
            <td>$810.00</td>
        </tr>
        <tr>
            <td>Mall Location</td>
            <td>Home &amp; Garden</td>
            <td>01/16/2024</td>
            <td>Patio Set</td>
            <td>1299.00</td>
            <td>129.90</td>
            <td>1169.10</td>
        </tr>
    </tbody>
</table>
"""

CONSIGNABLE_ROWS_HTML = """
<tr class="odd">
    <td>Downtown Branch</td>
    <td>Tech Solutions Inc.</td>
    <td>March 15, 2024</td>
    <td>Laptop Computer - Dell XPS 13</td>
    <td>$1,299.99</td>
    <td>$129.99</td>
    <td>$1,170.00</td>
</tr>
<tr class="even">
    <td>Mall Outlet</td>
    <td>Home Essentials LLC</td>
    <td>03/16/2024</td>
    <td>Kitchen Appliance Set</td>
    <td>$899.50</td>
    <td>$89.95</td>
    <td>$809.55</td>
</tr>
<tr class="odd">
    <td>Westside Store</td>
    <td>Fashion Forward Co.</td>
    <td>2024-03-17</td>
    <td>Designer Handbag Collection</td>
    <td>$2,450.00</td>
    <td>$245.00</td>
    <td>$2,205.00</td>
</tr>
"""

TAB_DELIMITED_TEXT = (
    "Store\tVendor\tDate\tDescription\tSale Price\tCommission\tRemaining\n"
    "Downtown Store\tElectronics Plus\t2024-01-15\tSamsung TV\t899.99\t89.99\t810.00\n"
    "Mall Location\tHome & Garden\t2024-01-16\tPatio Set\t1299.00\t129.90\t1169.10"
)
