"""
Selectores y URLs del portal SISTER (Agenzia delle Entrate).
Identificados mediante exploración manual del sitio.

Fuente: https://iampe.agenziaentrate.gov.it/sam/UI/Login?realm=/agenziaentrate

Todos los localizadores están agrupados por paso lógico del flujo, de modo que
un cambio de markup se corrige aquí y no en la lógica de navegación.
"""

# ============================================================================
# PÁGINA DE LOGIN
# ============================================================================

LOGIN_URL = "https://iampe.agenziaentrate.gov.it/sam/UI/Login?realm=/agenziaentrate"

LOGIN_SELECTORS = {
    "sister_tab": "xpath=//*[@id='main']/div/div[2]/ul/li[5]",
    "username_input": "#username-sister",
    "password_input": "#password-fo-sist",
    "submit_button": "xpath=//*[@id='tab-5']/div/div[3]/button",
}

# ============================================================================
# CONSENSO DATOS PERSONALES
# ============================================================================

PERSONAL_DATA_SELECTORS = {
    "confirm_button": "xpath=//*[@id='colonna1']/div[2]/form/input[1]",
}

# ============================================================================
# SELECCIÓN DE PROVINCIA (VISURA CATASTALE)
# ============================================================================

PROVINCE_SELECTION_URL = (
    "https://sister3.agenziaentrate.gov.it/Visure/SceltaServizio.do?tipo=/T/TM/VCVC_"
)

PROVINCE_SELECTORS = {
    "province_select": "select[name='listacom']",
    "apply_button": "xpath=//*[@id='colonna1']/div[2]/form/input",
}

# ============================================================================
# BÚSQUEDA POR CÓDIGO FISCAL / PARTITA IVA
# ============================================================================

SEARCH_SELECTORS = {
    "fiscal_code_input": "xpath=//*[@id='cf']",
    "summary_region": "div.riepilogo",
    "matches_label": "Omonimi individuati",
    "property_button": "xpath=//*[@id='colonna1']/div[2]/form/table/tbody/tr/td[1]/input[1]",
}

INDIVIDUAL_SEARCH_SELECTORS = {
    "radio_button": (
        "xpath=//*[@id='colonna1']/div[2]/form/fieldset[1]/table[3]/tbody/tr[9]/td[1]/input"
    ),
    "search_button": "xpath=//*[@id='colonna1']/div[2]/form/p/input[4]",
    "first_result": (
        "xpath=//*[@id='colonna1']/div[2]/form/fieldset/table/tbody/tr[2]/td[1]/input"
    ),
}

COMPANY_SEARCH_SELECTORS = {
    "menu_tab": "xpath=//*[@id='menu-left']/li[2]/a",
    "radio_button": (
        "xpath=//*[@id='colonna1']/div[2]/form/fieldset[1]/table/tbody/tr/td"
        "/table[5]/tbody/tr/td[1]/input"
    ),
    "search_button": "xpath=//*[@id='colonna1']/div[2]/form/input[5]",
    "first_result": (
        "xpath=//*[@id='colonna1']/div[2]/form/fieldset/table/tbody[2]/tr/td[1]/input"
    ),
}

# ============================================================================
# TABLA DE INMUEBLES
# ============================================================================

RESULTS_SELECTORS = {
    "results_table": "#colonna1 > div.pagina > form > fieldset > table",
}

# ============================================================================
# LOGOUT
# ============================================================================

LOGOUT_SELECTORS = {
    "logout_link": "xpath=//*[@id='user-collapse']/div/a",
}

# Tabla completa, indexada por nombre lógico del paso
SISTER_LOCATORS = {
    "login": LOGIN_SELECTORS,
    "personal_data": PERSONAL_DATA_SELECTORS,
    "province": PROVINCE_SELECTORS,
    "search": SEARCH_SELECTORS,
    "search_individual": INDIVIDUAL_SEARCH_SELECTORS,
    "search_company": COMPANY_SEARCH_SELECTORS,
    "results": RESULTS_SELECTORS,
    "logout": LOGOUT_SELECTORS,
}
