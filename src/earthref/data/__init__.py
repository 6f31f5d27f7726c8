"""Data files distributed with earthref.

- ``eop/``: seed ``FINALS_2000`` file used when the EOP cache is empty.
- ``gravity_models/``: seed GFC files for each named gravity product.

The seed files let the default instances load without network access.  They
hold only a few days of EOP data and the low-degree gravity terms; refresh
the EOP cache and place full ICGEM files in the gravity model cache for real
work.
"""
