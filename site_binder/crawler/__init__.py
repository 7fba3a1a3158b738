"""site_binder.crawler: обход сайта и общие структуры состояния обхода."""
