"""
HTML Templates for the Node LAN Portal

Rendered with Flask's render_template_string. Every page is wrapped in the
shared head, navigation menu, theme toggle and footer.
"""

_PAGE_START = '''<!doctype html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <meta name="description" content="{{ description }}">
    <title>{{ title }}</title>
    <style>
        * { box-sizing: border-box; margin: 0; padding: 0; }
        :root {
            --bg: #f4f6f8;
            --bg-card: #ffffff;
            --text: #1a1a2e;
            --muted: #5a6270;
            --accent: #2E7D32;
            --online: #4CAF50;
            --offline: #f44336;
            --unknown: #9e9e9e;
        }
        body.night-vision {
            --bg: #0a0000;
            --bg-card: #1a0505;
            --text: #ff4d4d;
            --muted: #b33636;
            --accent: #ff1a1a;
        }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: var(--bg);
            color: var(--text);
            line-height: 1.5;
        }
        a { color: var(--accent); }
        .sr-only {
            position: absolute; width: 1px; height: 1px; padding: 0; margin: -1px;
            overflow: hidden; clip: rect(0, 0, 0, 0); border: 0;
        }
        .site-menu { display: flex; align-items: center; padding: 12px 20px; background: var(--bg-card); }
        .menu-toggle { background: none; border: 0; cursor: pointer; padding: 6px; }
        .menu-icon span { display: block; width: 22px; height: 3px; margin: 4px 0; background: var(--text); }
        .menu-drawer ul { list-style: none; display: flex; gap: 20px; }
        .site-menu.js-ready .menu-drawer { display: none; }
        .site-menu.js-ready.menu-open .menu-drawer { display: block; margin-left: 16px; }
        .theme-toggle {
            position: fixed; top: 12px; right: 20px; padding: 6px 12px;
            border: 1px solid var(--accent); border-radius: 5px;
            background: var(--bg-card); color: var(--text); cursor: pointer;
        }
        .page-main { max-width: 960px; margin: 0 auto; padding: 30px 20px; }
        .page-hero { margin-bottom: 30px; }
        .hero-eyebrow { text-transform: uppercase; letter-spacing: 0.1em; color: var(--muted); }
        .hero-summary { color: var(--muted); margin: 10px 0 20px; }
        .hero-actions { display: flex; gap: 12px; flex-wrap: wrap; }
        .button {
            display: inline-block; padding: 10px 18px; border-radius: 5px;
            background: var(--accent); color: #fff; text-decoration: none;
        }
        .content-card {
            background: var(--bg-card); border-radius: 10px; padding: 24px;
            margin-bottom: 24px; box-shadow: 0 2px 10px rgba(0,0,0,0.08);
        }
        .content-card h2 { margin-bottom: 12px; }
        .feature-list, .download-links { margin: 12px 0 0 20px; }
        .download-grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(240px, 1fr)); gap: 16px; margin-top: 16px; }
        .download-card { border: 1px solid rgba(0,0,0,0.1); border-radius: 8px; padding: 16px; display: flex; flex-direction: column; gap: 10px; }
        .download-card__placeholder { color: var(--muted); font-style: italic; }
        .file-table { width: 100%; border-collapse: collapse; margin-top: 12px; }
        .file-table th, .file-table td { text-align: left; padding: 8px; border-bottom: 1px solid rgba(0,0,0,0.1); }
        .status-groups { display: grid; gap: 20px; margin-top: 16px; }
        .status-group__header p { color: var(--muted); }
        .status-list { list-style: none; margin-top: 10px; }
        .status-item { display: flex; justify-content: space-between; padding: 8px 0; border-bottom: 1px solid rgba(0,0,0,0.08); }
        .status-item__primary { display: flex; align-items: center; gap: 10px; }
        .status-indicator { width: 12px; height: 12px; border-radius: 50%; display: inline-block; }
        .status-indicator--online { background: var(--online); }
        .status-indicator--offline { background: var(--offline); }
        .status-indicator--unknown { background: var(--unknown); }
        .site-footer { text-align: center; color: var(--muted); padding: 20px; font-size: 0.9em; }
    </style>
</head>
<body>
    <nav class="site-menu" aria-label="Main navigation">
        <button class="menu-toggle" type="button" aria-expanded="false" aria-controls="site-menu-drawer">
            <span class="menu-icon" aria-hidden="true"><span></span><span></span><span></span></span>
            <span class="sr-only">Toggle navigation</span>
        </button>
        <div class="menu-drawer" id="site-menu-drawer">
            <ul>
                <li><a href="{{ url_for('pages.index') }}">Home</a></li>
                <li><a href="{{ url_for('pages.downloads') }}">Downloads</a></li>
                <li><a href="{{ url_for('pages.mesh') }}">Mesh</a></li>
                <li><a href="{{ url_for('pages.system_status') }}">Status</a></li>
            </ul>
        </div>
    </nav>
    <button id="theme-toggle" class="theme-toggle" type="button" aria-pressed="false">Enable night vision</button>
    <main id="main-content" class="page-main" tabindex="-1">
'''

_PAGE_END = '''
    </main>
    <footer class="site-footer">Node LAN portal v{{ version }}</footer>
    <script>
    (function () {
        const nav = document.querySelector('.site-menu');
        if (!nav) { return; }
        const toggle = nav.querySelector('.menu-toggle');
        if (!toggle) { return; }
        const closeMenu = () => { toggle.setAttribute('aria-expanded', 'false'); nav.classList.remove('menu-open'); };
        const openMenu = () => { toggle.setAttribute('aria-expanded', 'true'); nav.classList.add('menu-open'); };
        nav.classList.add('js-ready');
        closeMenu();
        toggle.addEventListener('click', () => {
            nav.classList.contains('menu-open') ? closeMenu() : openMenu();
        });
        nav.addEventListener('keydown', (event) => {
            if (event.key === 'Escape' && nav.classList.contains('menu-open')) { closeMenu(); toggle.focus(); }
        });
        document.addEventListener('click', (event) => {
            if (!nav.contains(event.target)) { closeMenu(); }
        });
    })();
    (function () {
        const THEME_KEY = 'preferredTheme';
        const button = document.getElementById('theme-toggle');
        if (!button) { return; }
        function applyTheme(theme) {
            const on = theme === 'night-vision';
            document.body.classList.toggle('night-vision', on);
            button.textContent = on ? 'Disable night vision' : 'Enable night vision';
            button.setAttribute('aria-pressed', String(on));
        }
        function storedTheme() {
            try { return localStorage.getItem(THEME_KEY); } catch (e) { return null; }
        }
        function storeTheme(theme) {
            try {
                if (theme === 'night-vision') { localStorage.setItem(THEME_KEY, theme); }
                else { localStorage.removeItem(THEME_KEY); }
            } catch (e) { /* private browsing */ }
        }
        let current = storedTheme() === 'night-vision' ? 'night-vision' : 'standard';
        applyTheme(current);
        button.addEventListener('click', () => {
            current = current === 'night-vision' ? 'standard' : 'night-vision';
            applyTheme(current);
            storeTheme(current);
        });
    })();
    </script>
</body>
</html>
'''


INDEX_TEMPLATE = _PAGE_START + '''
        <header class="page-hero">
            <h1>Welcome to the Node LAN portal</h1>
            <p class="hero-summary">Your hub for software downloads, node status and mesh network info.</p>
            <div class="hero-actions">
                <a class="button" href="{{ url_for('pages.downloads') }}">Browse downloads</a>
                <a class="button" href="{{ url_for('pages.mesh') }}">Explore mesh resources</a>
                <a class="button" href="{{ url_for('pages.system_status') }}">System status</a>
            </div>
        </header>

        <section class="content-card">
            <h2>Getting started</h2>
            <p>
                Use the download center to grab the latest operating system builds, configuration
                archives, and supporting documentation. Each download entry links directly to the
                files hosted on this server so you can mirror or script access as needed.
            </p>
            <ul class="feature-list">
                <li>Review release notes before flashing a new image to your devices.</li>
                <li>Download assets directly or copy the link for automated deployments.</li>
                <li>Visit the mesh network area for site-to-site tooling and guidance.</li>
            </ul>
        </section>

        <section class="content-card">
            <h2>Quick links</h2>
            <p>Jump directly to the full directory listing to locate a specific image or asset.</p>
            <a class="button" href="{{ url_for('files.listing') }}">View raw directory</a>
        </section>
''' + _PAGE_END


DOWNLOADS_TEMPLATE = _PAGE_START + '''
        <header class="page-hero">
            <p class="hero-eyebrow">Download Center</p>
            <h1>Mission ready software packages</h1>
            <p class="hero-summary">
                Select an application below to review its capabilities and grab the latest
                build for your field kits. All downloads are served directly from this node
                for reliable offline mirroring.
            </p>
            <div class="hero-actions">
                <a class="button" href="{{ url_for('files.listing') }}">View raw directory</a>
                <a class="button" href="{{ url_for('pages.index') }}">Return to dashboard</a>
            </div>
        </header>

        <section class="content-card">
            <h2>Available downloads</h2>
            <div class="download-grid" aria-label="Available downloads">
            {% for item in catalog %}
                <article class="download-card">
                    <div class="download-card__body">
                        <h3 class="download-card__title">{{ item.title }}</h3>
                        <p class="download-card__description">{{ item.description }}</p>
                    </div>
                    {% if item.file %}
                    <a class="button download-card__button" href="{{ item.file }}" download>Download APK</a>
                    {% else %}
                    <span class="download-card__placeholder" aria-label="Download coming soon">Coming Soon</span>
                    {% endif %}
                </article>
            {% endfor %}
            </div>
        </section>

        <section class="content-card">
            <h2>Need direct access?</h2>
            <p>
                The <code>/files/</code> directory mirrors every artifact exposed through this
                portal. Use it to script automated retrievals or to capture checksums for
                integrity verification before field deployment.
            </p>
            <p><a href="{{ url_for('files.listing') }}">Open the /files/ directory</a></p>
        </section>
''' + _PAGE_END


MESH_TEMPLATE = _PAGE_START + '''
        <header class="page-hero">
            <p class="hero-eyebrow">Mesh Operations</p>
            <h1>Resources for resilient field connectivity</h1>
            <p class="hero-summary">
                Access deployment guides, live tooling, and situational awareness dashboards for
                your mesh network footprint.
            </p>
            <div class="hero-actions">
                <a class="button" href="{{ url_for('pages.downloads') }}">Grab supporting apps</a>
                <a class="button" href="{{ url_for('pages.index') }}">Return to dashboard</a>
            </div>
        </header>

        {% for section in sections %}
        <section class="content-card">
            <h2>{{ section.title }}</h2>
            <p>{{ section.summary }}</p>
            <ul class="download-links">
            {% for link in section.links %}
                <li><a href="{{ link.href }}">{{ link.label }}</a></li>
            {% endfor %}
            </ul>
        </section>
        {% endfor %}
''' + _PAGE_END


STATUS_TEMPLATE = _PAGE_START + '''
        <header class="page-hero">
            <h1>System status</h1>
            <p class="hero-summary">
                Verify the services, daemons, and tooling that keep the mesh network and LAN portal online.
            </p>
            <div class="hero-actions">
                <a class="button" href="{{ url_for('pages.index') }}">Back to homepage</a>
                <a class="button" href="{{ url_for('pages.downloads') }}">Download resources</a>
            </div>
        </header>

        <section class="content-card status-card" aria-labelledby="status-overview-heading">
            <h2 id="status-overview-heading">Live service overview</h2>
            <p class="status-summary">
                {{ counts.online }} online, {{ counts.offline }} offline, {{ counts.unknown }} unknown
                as of {{ report.generated_at.strftime('%Y-%m-%d %H:%M:%S') }}.
            </p>
            <div class="status-groups">
            {% for group_result in report.groups %}
                <section class="status-group" aria-labelledby="{{ group_result.group.key }}-heading">
                    <div class="status-group__header">
                        <h3 id="{{ group_result.group.key }}-heading">{{ group_result.group.title }}</h3>
                        <p>{{ group_result.group.description }}</p>
                    </div>
                    <ul class="status-list">
                    {% for result in group_result.results %}
                        <li class="status-item">
                            <div class="status-item__primary">
                                <span class="status-indicator {{ result.state.css_class }}" aria-hidden="true"></span>
                                <span class="status-item__label">{{ result.label }}</span>
                            </div>
                            <span class="status-item__state">
                                {{ result.message }}
                                <span class="sr-only">for {{ result.label }}</span>
                            </span>
                        </li>
                    {% endfor %}
                    </ul>
                </section>
            {% endfor %}
            </div>
        </section>
''' + _PAGE_END


FILES_TEMPLATE = _PAGE_START + '''
        <header class="page-hero">
            <h1>Index of {{ url_prefix }}</h1>
            <p class="hero-summary">{{ entries|length }} file{{ '' if entries|length == 1 else 's' }} available.</p>
        </header>

        <section class="content-card">
        {% if entries %}
            <table class="file-table">
                <thead>
                    <tr><th scope="col">Name</th><th scope="col">Size</th><th scope="col">Modified</th></tr>
                </thead>
                <tbody>
                {% for entry in entries %}
                    <tr>
                        <td><a href="{{ entry.url }}">{{ entry.name }}</a></td>
                        <td>{{ entry.size_display }}</td>
                        <td>{{ entry.modified.strftime('%Y-%m-%d %H:%M') }}</td>
                    </tr>
                {% endfor %}
                </tbody>
            </table>
        {% else %}
            <p>No files are published on this node yet.</p>
        {% endif %}
        </section>
''' + _PAGE_END
