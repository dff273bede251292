# studio/routes/main_routes.py

from flask import Blueprint, render_template, current_app, request, flash, redirect, url_for, abort
from flask_login import current_user

from .. import limiter
from ..forms import ContactForm
from ..services.contact_service import submit_contact
from ..services.helpers import site_content

main_bp = Blueprint('main', __name__)

def _home_context(form):
    return dict(
        title="Creative Studio",
        form=form,
        services=site_content.SERVICES,
        process_steps=site_content.PROCESS_STEPS,
        features=site_content.FEATURES,
        stats=site_content.STATS,
        testimonials=site_content.TESTIMONIALS,
        faqs=site_content.FAQS,
        featured=[p for p in site_content.PORTFOLIO_PROJECTS if p["featured"]][:3],
    )

@main_bp.route('/')
def index():
    return render_template('main/index.html', **_home_context(ContactForm()))

@main_bp.route('/about')
def about():
    return render_template('main/about.html', title="About Us", stats=site_content.STATS,
                           process_steps=site_content.PROCESS_STEPS)

@main_bp.route('/portfolio')
def portfolio():
    category = request.args.get('category', 'all')
    return render_template('main/portfolio.html',
                           title="Portfolio",
                           categories=site_content.PORTFOLIO_CATEGORIES,
                           active_category=category,
                           projects=site_content.list_portfolio(category),
                           category_label=site_content.category_label)

@main_bp.route('/portfolio/<item_id>')
def portfolio_detail(item_id):
    item = site_content.get_portfolio_item(item_id)
    if not item:
        abort(404)
    return render_template('main/portfolio_detail.html',
                           title=item["title"],
                           project=item,
                           category_label=site_content.category_label(item["category"]),
                           deliverable_kind=site_content.CATEGORY_DELIVERABLE.get(item["category"], "solution"))

@main_bp.route('/contact', methods=['POST'])
@limiter.limit(lambda: current_app.config['CONTACT_RATE_LIMIT'])
def contact():
    form = ContactForm()
    if form.validate_on_submit():
        profile = current_user if current_user.is_authenticated else None
        try:
            submit_contact(form.data, profile=profile, source='website')
            flash("Thank you! Your message has been sent. We'll get back to you shortly.", "success")
            return redirect(url_for('main.index') + '#contact')
        except Exception:
            flash("Something went wrong while sending your message. Please try again.", "danger")

    # Re-render the home page so the visitor sees field errors next to their input
    return render_template('main/index.html', **_home_context(form)), 400
